# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up test environment variables before any imports
# - Every app / db fixture gets its own in-memory SQLite database
# - Low bcrypt cost so password hashing doesn't dominate the run
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "false")

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app
from core.services.auth_service import AuthService
from lib.database import create_db_engine, create_session_factory, init_db

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "correct-horse-battery"
TEST_ROUNDS = 4


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def test_settings():
    """Settings for an isolated app: in-memory database, no storage."""
    return Settings(
        _env_file=None,
        DATABASE_URL="sqlite://",
        BCRYPT_ROUNDS=TEST_ROUNDS,
        SUPABASE_URL=None,
        SUPABASE_SERVICE_KEY=None,
        CORS_ORIGINS="http://localhost:5173",
    )


@pytest.fixture
def app(test_settings):
    return create_app(test_settings)


@pytest.fixture
def client(app):
    """TestClient with the lifespan running (context, tables, profile row)."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def context(client):
    return client.app.state.context


@pytest.fixture
def admin(context):
    """The admin account, created directly through the service."""
    db = context.session_factory()
    try:
        return AuthService.create_admin(db, ADMIN_USERNAME, ADMIN_PASSWORD, rounds=TEST_ROUNDS)
    finally:
        db.close()


@pytest.fixture
def admin_client(client, admin):
    """A client holding a valid session cookie."""
    response = client.post(
        "/api/admin/login",
        json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200
    return client


@pytest.fixture
def db():
    """A bare database session for service-level tests."""
    engine = create_db_engine("sqlite://")
    init_db(engine)
    session = create_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def db_admin(db):
    return AuthService.create_admin(db, ADMIN_USERNAME, ADMIN_PASSWORD, rounds=TEST_ROUNDS)
