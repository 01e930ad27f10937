"""
Central pytest configuration for the hospital backend tests.

This file sets the test environment before the application is imported,
registers markers and provides the Flask app, test client and database
fixtures shared by unit and integration tests.
"""

import os
from datetime import datetime, timedelta
from unittest.mock import Mock

import pytest

# Test database configuration (set early so the lazy engine uses it)
TEST_DATABASE_URL = "sqlite:///:memory:"  # In-memory SQLite for fast tests
os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ["TESTING"] = "true"
os.environ["RATE_LIMIT_ENABLED"] = "0"  # Disable rate limiting in tests
os.environ["LOG_TO_FILE"] = "0"
os.environ["EXPOSE_ERROR_DETAILS"] = "1"
os.environ.setdefault("TZ", "UTC")

from hospital.core.config import now_local  # noqa: E402
from hospital.db.session import SessionLocal, create_tables, drop_tables  # noqa: E402
from hospital.main import create_app  # noqa: E402
from tests.config.markers import (  # noqa: E402,F401
    pytest_collection_modifyitems,
    pytest_configure,
    response_helper,
)

# Fixed "now" used by unit tests that inject a clock
FIXED_NOW = datetime(2030, 1, 15, 9, 0, 0)


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def clock():
    """Clock callable returning ``FIXED_NOW``."""
    return lambda: FIXED_NOW


@pytest.fixture
def mock_db_session():
    """Session stand-in for services: only commit/rollback are used."""
    return Mock()


@pytest.fixture
def app():
    """Create and configure a Flask app with a fresh schema for each test."""
    create_tables()
    flask_app = create_app()
    flask_app.config.update({"TESTING": True})
    yield flask_app
    drop_tables()


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture
def db_session(app):
    """Standalone session on the test database, closed after the test."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def tomorrow_at():
    """Build an ISO date-time string for tomorrow at the given hour."""

    def _build(hour: int, minute: int = 0) -> str:
        moment = (now_local() + timedelta(days=1)).replace(
            hour=hour, minute=minute, second=0, microsecond=0
        )
        return moment.isoformat()

    return _build
