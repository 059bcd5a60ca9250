"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from src.database import Base, engine_options, get_db
from src.main import app
from src.models.enums import Role
from src.models.store import Store
from src.services.auth import create_access_token, create_user

TEST_PASSWORD = "Secret#123"  # noqa: S105


class AuthHeaders(dict):
    """Dict subclass that also stores user_id and email."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace(
        "/store_ratings", "/store_ratings_test"
    )
else:
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(SQLALCHEMY_DATABASE_URL, **engine_options(SQLALCHEMY_DATABASE_URL))
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

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


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    """Factory creating a user of any role directly through the auth service."""

    def _make_user(email: str, role: Role = Role.NORMAL_USER, name: str | None = None, **kwargs):
        return create_user(
            db,
            name=name or f"Account for {email}",
            email=email,
            address=kwargs.get("address", "1 Test Street"),
            password=kwargs.get("password", TEST_PASSWORD),
            role=role,
        )

    return _make_user


@pytest.fixture
def make_store(db):
    """Factory creating a store for an owner."""

    def _make_store(name: str, owner_id: int, address: str = "1 Market Street"):
        store = Store(name=name, address=address, owner_id=owner_id)
        db.add(store)
        db.commit()
        db.refresh(store)
        return store

    return _make_store


def bearer_headers(user) -> AuthHeaders:
    """Bearer headers for a user."""
    token = create_access_token(user.id, user.role)
    return AuthHeaders({"Authorization": f"Bearer {token}"}, user_id=user.id, email=user.email)


@pytest.fixture
def headers_for():
    """Build bearer headers for any user."""
    return bearer_headers


@pytest.fixture
def auth_headers(client):
    """Sign up a normal user and return auth headers with user info."""
    response = client.post(
        "/api/v1/auth/signup",
        json={
            "name": "Test User With A Long Name",
            "email": "test@example.com",
            "address": "42 Test Avenue",
            "password": TEST_PASSWORD,
        },
    )
    assert response.status_code == 201
    data = response.json()
    return AuthHeaders(
        {"Authorization": f"Bearer {data['access_token']}"},
        user_id=data["user"]["id"],
        email=data["user"]["email"],
    )


@pytest.fixture
def admin_headers(make_user):
    """Auth headers for an admin."""
    return bearer_headers(make_user("admin@example.com", Role.ADMIN))


@pytest.fixture
def owner(make_user):
    """A store owner."""
    return make_user("owner@example.com", Role.STORE_OWNER)


@pytest.fixture
def owner_headers(owner):
    """Auth headers for the store owner."""
    return bearer_headers(owner)
