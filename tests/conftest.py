"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- FastAPI test client
- Local file storage in a temp directory
- Sample catalog data and authenticated users
"""

import os
import tempfile

# Settings are read at import time, so point them at test resources first
os.environ["SQLALCHEMY_DATABASE_URI"] = "sqlite://"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["SEED_SAMPLE_DATA"] = "false"
os.environ["USE_S3"] = "false"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="workwise-uploads-")
os.environ["JSON_LOGS"] = "false"
os.environ["OPENAI_API_KEY"] = ""
os.environ["ANTHROPIC_API_KEY"] = ""
os.environ["SLACK_WEBHOOK_URL"] = ""
os.environ["SECURITY_PUSH_TOKEN"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from workwise.core.database import Base, get_db
from workwise.core.security import get_password_hash
from workwise.core.storage import LocalStorage
from workwise.api.endpoints.files import get_file_storage
from workwise.models.category import Category
from workwise.models.company import Company
from workwise.models.job import Job
from workwise.models.user import User
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    """
    Create a fresh database for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def local_storage(tmp_path):
    """Local storage backend rooted in a per-test directory."""
    return LocalStorage(str(tmp_path / "uploads"), "/files")


@pytest.fixture
def client(db_session, local_storage):
    """
    FastAPI test client with overridden database and storage dependencies.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_file_storage] = lambda: local_storage

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def sample_catalog(db_session):
    """
    Two categories, two companies and three jobs:
    one featured warehouse job in Johannesburg, one Cape Town waiter job,
    and one Johannesburg security job.
    """
    logistics = Category(name="Logistics", slug="logistics", icon="Truck")
    hospitality = Category(name="Hospitality", slug="hospitality", icon="Coffee")
    logicorp = Company(
        name="LogiCorp SA",
        slug="logicorp-sa",
        location="Johannesburg, Gauteng",
        description="Warehousing and delivery.",
    )
    cape = Company(
        name="Cape Hospitality Group",
        slug="cape-hospitality-group",
        location="Cape Town, Western Cape",
    )
    db_session.add_all([logistics, hospitality, logicorp, cape])
    db_session.flush()

    jobs = [
        Job(
            title="Warehouse Assistant",
            description="Pick and pack orders, forklift experience is a plus.",
            location="Johannesburg, Gauteng",
            salary="R6,000 - R8,000",
            job_type="Full-time",
            work_mode="On-site",
            company_id=logicorp.id,
            category_id=logistics.id,
            is_featured=True,
        ),
        Job(
            title="Waiter",
            description="Serve guests at our waterfront restaurant.",
            location="Cape Town, Western Cape",
            job_type="Part-time",
            company_id=cape.id,
            category_id=hospitality.id,
        ),
        Job(
            title="Security Guard",
            description="Night shift access control at the distribution centre.",
            location="Johannesburg, Gauteng",
            job_type="Contract",
            company_id=logicorp.id,
            category_id=None,
        ),
    ]
    db_session.add_all(jobs)
    db_session.commit()

    return {
        "categories": {"logistics": logistics, "hospitality": hospitality},
        "companies": {"logicorp": logicorp, "cape": cape},
        "jobs": jobs,
    }


def create_user(db_session, username="thabo", password="Secret123", is_admin=False):
    """Helper to create a user directly in the database"""
    user = User(
        username=username,
        hashed_password=get_password_hash(password),
        email=f"{username}@example.co.za",
        name=username.title(),
        is_active=True,
        is_admin=is_admin,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


def login_headers(client, username, password):
    """Helper to log in and build Bearer headers"""
    response = client.post("/api/users/login", data={"username": username, "password": password})
    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(client, db_session):
    create_user(db_session, username="admin", password="AdminPass123", is_admin=True)
    return login_headers(client, "admin", "AdminPass123")


@pytest.fixture
def user_headers(client, db_session):
    create_user(db_session, username="lerato", password="Secret123")
    return login_headers(client, "lerato", "Secret123")
