"""Pytest configuration and fixtures."""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from src.api.dependencies import get_email_service
from src.database import Base, get_db
from src.main import app
from src.services.email import EmailService


class AuthHeaders(dict):
    """Dict subclass that also stores user_id and email."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace(
        "/household_pantry", "/household_pantry_test"
    )
else:
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    from src import models  # noqa: F401

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


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
def email_service():
    """Email service double that records invitation emails."""
    service = MagicMock(spec=EmailService)
    service.send_invitation = AsyncMock(return_value="msg_test")
    return service


@pytest.fixture(scope="function")
def client(db, email_service):
    """Create a test client with database and email overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_service] = lambda: email_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def register_user(client):
    """Factory that registers a user and returns their auth headers."""

    def _register(email: str, name: str | None = None, password: str = "testpass123"):
        response = client.post(
            "/api/v1/auth/register",
            json={"email": email, "password": password, "name": name},
        )
        assert response.status_code == 201, response.text
        data = response.json()
        return AuthHeaders(
            {"Authorization": f"Bearer {data['access_token']}"},
            user_id=data["user"]["id"],
            email=data["user"]["email"],
        )

    return _register


@pytest.fixture
def auth_headers(register_user):
    """Create a user and return auth headers with user info."""
    return register_user("test@example.com", "Test User")


@pytest.fixture
def other_headers(register_user):
    """A second, unrelated user."""
    return register_user("other@example.com", "Other User")


@pytest.fixture
def household(client, auth_headers):
    """A household owned by the auth_headers user."""
    response = client.post(
        "/api/v1/households",
        headers=auth_headers,
        json={"name": "Smiths"},
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def create_item(client, auth_headers, household):
    """Factory that adds a pantry item to the household."""

    def _create(headers=None, household_id=None, **fields):
        fields.setdefault("name", "Milk")
        response = client.post(
            f"/api/v1/households/{household_id or household['id']}/pantry",
            headers=headers or auth_headers,
            json=fields,
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create
