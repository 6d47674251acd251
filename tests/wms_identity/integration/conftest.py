"""
Pytest configuration for wms_identity integration tests.

Tests run against an in-memory SQLite database unless they are marked
with @pytest.mark.integration, which gives them a Testcontainers
PostgreSQL instance.
"""

import pytest

from tests.shared.fixtures.database import (
    async_engine,
    db_session,
    identity_settings,
    postgres_container,
    session_factory,
    sqlite_engine,
    sqlite_session,
)
from wms_identity import UserService, create_user_service

__all__ = [
    "async_engine",
    "db_session",
    "identity_settings",
    "postgres_container",
    "session_factory",
    "sqlite_engine",
    "sqlite_session",
    "user_service",
]


@pytest.fixture
def user_service(session_factory, identity_settings) -> UserService:
    """UserService wired to the in-memory SQLite store."""
    return create_user_service(session_factory, identity_settings)
