"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
For standard test utilities, see tests/__init__.py
"""

import pytest

from tests import make_session_factory, check_db_available, TEST_DB_URL


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "db: marks tests as requiring PostgreSQL (deselect with '-m \"not db\"')"
    )


@pytest.fixture
def session_factory():
    """Session factory bound to a fresh in-memory SQLite schema."""
    return make_session_factory()


@pytest.fixture(scope="session")
def postgres_session_factory():
    """Session factory bound to the PostgreSQL test database, if reachable."""
    if not check_db_available():
        pytest.skip("PostgreSQL test database not available")
    return make_session_factory(TEST_DB_URL)
