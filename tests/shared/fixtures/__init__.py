"""Shared pytest fixtures for all test domains."""

from tests.shared.fixtures.database import (
    async_engine,
    db_session,
    identity_settings,
    make_test_settings,
    postgres_container,
    session_factory,
    sqlite_engine,
    sqlite_session,
)

__all__ = [
    "async_engine",
    "db_session",
    "identity_settings",
    "make_test_settings",
    "postgres_container",
    "session_factory",
    "sqlite_engine",
    "sqlite_session",
]
