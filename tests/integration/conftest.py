"""Shared fixtures for integration tests."""

from tests.fixtures.database import (
    app_with_db,
    client_with_db,
    database_url,
    db_engine,
    db_session,
)

# Re-export fixtures for pytest discovery
__all__ = [
    "app_with_db",
    "client_with_db",
    "database_url",
    "db_engine",
    "db_session",
]
