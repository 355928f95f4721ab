import logging
import os
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager

from workwise.core.config import settings
from workwise.core.database import init_db
from workwise.core.exception_handlers import RequestIDMiddleware, setup_exception_handlers
from workwise.core.logging_config import setup_logging
from workwise.api.endpoints import (
    admin,
    categories,
    companies,
    cv,
    files,
    health,
    jobs,
    profile_ai,
    profiles,
    recommendations,
    security,
    users,
)

setup_logging(log_level=settings.LOG_LEVEL, json_logs=settings.JSON_LOGS)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    logger.info("Starting up WorkWise SA API...")
    logger.info("Initializing database...")
    init_db()
    logger.info("Database initialized successfully")

    yield

    logger.info("Shutting down WorkWise SA API...")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    description="Job board API for South African job seekers: listings, profiles, CV builder and security monitoring",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestIDMiddleware)
setup_exception_handlers(app)

for module in (
    categories, companies, jobs, users, profiles, files, cv, profile_ai, recommendations, security, admin, health
):
    app.include_router(module.router, prefix=settings.API_PREFIX)

if not settings.USE_S3:
    # Local uploads are served by the API itself
    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    app.mount(settings.FILES_URL_PREFIX, StaticFiles(directory=settings.UPLOAD_DIR), name="files")


@app.get("/")
async def root():
    """Root endpoint - API health check"""
    return {
        "message": "WorkWise SA API",
        "version": "1.0.0",
        "status": "healthy"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=True,
        log_level="info"
    )
