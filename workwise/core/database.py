import logging

from sqlalchemy import create_engine, JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import sessionmaker
from workwise.core.config import settings

logger = logging.getLogger(__name__)

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests and local dev)
JSONType = JSON().with_variant(JSONB(), "postgresql")


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,  # Verify connections before using them
        "pool_size": 10,
        "max_overflow": 20,
    }


# Create SQLAlchemy engine
engine = create_engine(settings.DATABASE_URL, **_engine_kwargs(settings.DATABASE_URL))

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for models
Base = declarative_base()


def get_db():
    """
    Dependency function to get database session.
    Used in FastAPI endpoints with Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """
    Initialize database.

    Production schemas are managed with Alembic ("alembic upgrade head").
    For local development AUTO_CREATE_TABLES creates missing tables directly,
    and SEED_SAMPLE_DATA loads the sample categories, companies and jobs.
    """
    from workwise import models  # noqa: F401  Import models to register them

    if settings.AUTO_CREATE_TABLES:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created")

    if settings.SEED_SAMPLE_DATA:
        from workwise.services.sample_data import initialize_data

        db = SessionLocal()
        try:
            initialize_data(db)
        finally:
            db.close()
