"""
Pytest configuration - runs before any test imports.

Environment variables must be in place before ``bingekaro.settings`` is
imported, since the settings singleton is built at import time. Tests run
against a single in-memory SQLite database shared through StaticPool.
"""
import os
import tempfile

# JWT_SECRET_KEY must be at least 16 characters (validated by Pydantic)
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-testing-only-min-16-chars")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["OMDB_API_KEY"] = "test-omdb-key"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="bingekaro-uploads-")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from bingekaro.auth.security import create_access_token
from bingekaro.database import Base, get_db
from bingekaro.users.service import register_user

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    """Override database dependency for testing."""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def db_session():
    """A session on a fresh schema, for tests that skip the HTTP layer."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    """Test client with the database dependency pointed at the test engine."""
    Base.metadata.create_all(bind=engine)

    from bingekaro.main import app

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    # Clean up
    Base.metadata.drop_all(bind=engine)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(client):
    """Factory creating active users directly in the database."""

    def _make_user(username, password="password123", display_name=None, email=None):
        db = TestingSessionLocal()
        try:
            user = register_user(
                db,
                display_name=display_name or username.title(),
                username=username,
                email=email or f"{username}@example.com",
                password=password,
            )
            db.expunge(user)
            return user
        finally:
            db.close()

    return _make_user


def auth_headers(user_id):
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


@pytest.fixture
def headers_for():
    """Bearer headers for any user id."""
    return auth_headers


@pytest.fixture
def alice(make_user):
    return make_user("alice")


@pytest.fixture
def bob(make_user):
    return make_user("bob")


@pytest.fixture
def alice_headers(alice):
    return auth_headers(alice.id)


@pytest.fixture
def bob_headers(bob):
    return auth_headers(bob.id)
