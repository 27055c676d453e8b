"""Pytest configuration and fixtures."""

import json
import os
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from src.database import Base, get_db
from src.main import app
from src.services.catalog import ProductCatalog, get_catalog
from src.services.strava_client import StravaClient, get_strava_client


class AuthHeaders(dict):
    """Dict subclass that also stores user_id and email."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace(
        "/supplement_tracker", "/supplement_tracker_test"
    )
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

CATALOG_LABELS = [
    {
        "id": 1001,
        "fullName": "Vitamin D3 5000 IU",
        "brandName": "NOW Foods",
        "upcSku": "012345",
        "servingSizes": [{"quantity": 1, "unit": "Softgel(s)"}],
        "productType": {"langualCode": "A1305", "langualCodeDescription": "Vitamin"},
    },
    {
        "id": 1002,
        "fullName": "Magnesium Glycinate",
        "brandName": "Thorne",
        "upcSku": "693749",
        "servingSizes": [{"quantity": 2, "unit": "Capsule(s)"}],
        "productType": {"langualCode": "A1302", "langualCodeDescription": "Mineral"},
    },
    {
        "id": 1003,
        "fullName": "Omega-3 Fish Oil",
        "brandName": "Nordic Naturals",
        "upcSku": None,
        "servingSizes": [],
    },
]


def signup_payload(**overrides) -> dict:
    """Build a valid signup body; keyword arguments replace fields."""
    payload = {
        "username": "testuser",
        "email": "test@example.com",
        "password": "testpass123",
        "firstName": "Test",
        "lastName": "User",
        "dateOfBirth": "1990-05-17",
        "sports": ["running", "cycling"],
        "allergies": ["shellfish"],
    }
    payload.update(overrides)
    return payload


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        # For PostgreSQL, create the test database
        from sqlalchemy_utils import create_database, database_exists

        # Create test database if it doesn't exist
        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield
    # Don't drop database - just leave it for next run (each test cleans up after itself)


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def catalog_dir(tmp_path):
    """Write a small DSLD export, one label per file, plus a corrupt file and a non-object one."""
    data_dir = tmp_path / "dsld"
    data_dir.mkdir()
    for label in CATALOG_LABELS:
        (data_dir / f"{label['id']}.json").write_text(json.dumps(label), encoding="utf-8")
    (data_dir / "broken.json").write_text("{not json", encoding="utf-8")
    (data_dir / "list.json").write_text("[1, 2]", encoding="utf-8")
    return data_dir


@pytest.fixture
def catalog(catalog_dir):
    """Catalog over the fixture export."""
    return ProductCatalog(catalog_dir)


@pytest.fixture
def strava_client():
    """Strava client whose network calls are replaced with AsyncMocks."""
    mock_client = StravaClient()
    mock_client.exchange_code = AsyncMock()
    mock_client.refresh_access_token = AsyncMock()
    mock_client.list_activities = AsyncMock(return_value=[])
    return mock_client


@pytest.fixture(scope="function")
def client(db, catalog, strava_client):
    """Create a test client with database, catalog and Strava overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_catalog] = lambda: catalog
    app.dependency_overrides[get_strava_client] = lambda: strava_client
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def register(client, **overrides) -> AuthHeaders:
    """Sign up a user and return bearer headers for them."""
    payload = signup_payload(**overrides)
    response = client.post("/api/auth/signup", json=payload)
    assert response.status_code == 201, response.text
    data = response.json()
    return AuthHeaders(
        {"Authorization": f"Bearer {data['token']}"},
        user_id=data["userId"],
        email=payload["email"],
    )


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    return register(client)


@pytest.fixture
def other_auth_headers(client):
    """A second, unrelated user."""
    return register(client, username="otheruser", email="other@example.com")
