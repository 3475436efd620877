"""
Central pytest configuration for the gym back office tests.

Environment variables are set before anything from ``gym_backoffice`` is
imported so the lazy engine, timezone and limiter pick up test values.
Every test that touches the database gets a fresh in-memory schema.
"""

import os

# Test database configuration (set early so import-time settings use it)
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["TESTING"] = "true"
os.environ["RATE_LIMIT_ENABLED"] = "0"
os.environ["LOG_TO_FILE"] = "0"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["TZ"] = "UTC"
os.environ["JWT_SECRET_KEY"] = "test-jwt-secret-key-for-the-suite-only"
os.environ.setdefault("FLASK_ENV", "development")

import pytest  # noqa: E402

from gym_backoffice.core.security import create_admin_token  # noqa: E402
from gym_backoffice.db.session import (  # noqa: E402
    SessionLocal,
    create_tables,
    drop_tables,
)
from gym_backoffice.domain.entities import Admin  # noqa: E402
from gym_backoffice.repositories.admin_repo import AdminRepository  # noqa: E402
from gym_backoffice.services.auth_service import AuthService  # noqa: E402
from tests.config.markers import (  # noqa: E402,F401
    pytest_collection_modifyitems,
    pytest_configure,
)

TEST_ADMIN_ID = "frontdesk"
TEST_ADMIN_PASSWORD = "s3cret-pass"


@pytest.fixture
def database():
    """Fresh schema for one test."""
    drop_tables()
    create_tables()
    yield
    drop_tables()


@pytest.fixture
def db_session(database):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def app(database):
    from gym_backoffice.main import create_app

    flask_app = create_app()
    flask_app.config.update(TESTING=True)
    yield flask_app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin(db_session):
    return AuthService(AdminRepository(db_session)).create_admin(
        Admin(admin_id=TEST_ADMIN_ID, fname="Front", lname="Desk"),
        TEST_ADMIN_PASSWORD,
    )


@pytest.fixture
def auth_headers(admin):
    token = create_admin_token(admin.id, admin.admin_id)
    return {"Authorization": f"Bearer {token}"}
