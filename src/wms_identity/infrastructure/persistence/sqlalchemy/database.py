"""Engine and session factory helpers for the identity store."""

import logging
from pathlib import Path

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

# Import models to register them with IdentityBase.metadata
import wms_identity.infrastructure.persistence.sqlalchemy.models  # noqa: F401
from wms_config.settings import Settings, get_settings
from wms_identity.infrastructure.persistence.sqlalchemy.base import IdentityBase

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:  # noqa: ARG001
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine(settings: Settings | None = None) -> AsyncEngine:
    """Create the async engine for the configured database URL."""
    settings = settings or get_settings()
    url = settings.database_url

    if settings.is_sqlite:
        db_path = url.split("///")[-1]
        if db_path == ":memory:":
            # One shared connection, otherwise every session sees an empty database
            engine = create_async_engine(
                url,
                echo=settings.database_echo,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )
        else:
            # Ensure data directory exists for file based SQLite
            if db_path:
                Path(db_path).parent.mkdir(parents=True, exist_ok=True)
            engine = create_async_engine(url, echo=settings.database_echo)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_async_engine(
        url,
        echo=settings.database_echo,
        pool_pre_ping=True,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """
    Create all identity tables (idempotent).

    Uses SQLAlchemy's create_all() which only creates missing tables.
    Existing tables and their data are never modified or deleted.
    """
    logger.info("Ensuring all identity tables exist...")
    async with engine.begin() as conn:
        await conn.run_sync(IdentityBase.metadata.create_all)
    logger.info("Identity schema is up to date")


async def drop_tables(engine: AsyncEngine) -> None:
    """
    Drop all identity tables (USE WITH CAUTION!).

    This is primarily for testing and development reset scenarios.
    """
    logger.warning("Dropping all identity tables...")
    async with engine.begin() as conn:
        await conn.run_sync(IdentityBase.metadata.drop_all)
