# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides sample database rows and users
# - Lets tests pick the session behind each request without a real
#   identity provider
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-for-unit-tests")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.auth import AuthUser, get_session_resolver
from core.models.user import Role


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def admin_user():
    """An authenticated administrator."""
    return AuthUser(id="admin-1", name="Ana Admin", email="ana@example.com", role=Role.ADMIN)


@pytest.fixture
def basic_user():
    """An authenticated read-only user."""
    return AuthUser(id="user-2", name="Beto User", email="beto@example.com", role=Role.USER)


@pytest.fixture
def client():
    """Test client for the API; clears dependency overrides afterwards."""
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def login():
    """
    Choose the session behind subsequent requests.

    login(user) authenticates every request as user, login(None) makes
    requests anonymous.
    """

    def _login(user: AuthUser | None):
        async def fake_resolver(request):
            return user

        app.dependency_overrides[get_session_resolver] = lambda: fake_resolver

    yield _login
    app.dependency_overrides.clear()


@pytest.fixture
def owner_row():
    """Owner projection embedded in transaction rows."""
    return {"id": "admin-1", "name": "Ana Admin", "email": "ana@example.com"}


@pytest.fixture
def transaction_rows(owner_row):
    """Transaction rows as PostgREST returns them, newest first."""
    return [
        {
            "id": "txn-3",
            "concept": "Venta de equipo",
            "amount": 300,
            "date": "2024-02-01",
            "type": "INGRESO",
            "user_id": "admin-1",
            "created_at": "2024-02-01T09:00:00+00:00",
            "user": owner_row,
        },
        {
            "id": "txn-2",
            "concept": 'Pago "extra"',
            "amount": 200,
            "date": "2024-01-10",
            "type": "EGRESO",
            "user_id": "admin-1",
            "created_at": "2024-01-10T09:00:00+00:00",
            "user": owner_row,
        },
        {
            "id": "txn-1",
            "concept": "Pago de nómina",
            "amount": 500,
            "date": "2024-01-05",
            "type": "INGRESO",
            "user_id": "admin-1",
            "created_at": "2024-01-05T09:00:00+00:00",
            "user": owner_row,
        },
    ]


@pytest.fixture
def user_rows():
    """User rows as PostgREST returns them, ordered by name."""
    return [
        {
            "id": "admin-1",
            "name": "Ana Admin",
            "email": "ana@example.com",
            "phone": None,
            "role": "ADMIN",
            "image": "https://avatars.githubusercontent.com/u/1",
            "created_at": "2024-01-01T08:00:00+00:00",
        },
        {
            "id": "user-2",
            "name": "Beto User",
            "email": "beto@example.com",
            "phone": "+34 600 000 000",
            "role": "USER",
            "image": None,
            "created_at": "2024-01-02T08:00:00+00:00",
        },
    ]
