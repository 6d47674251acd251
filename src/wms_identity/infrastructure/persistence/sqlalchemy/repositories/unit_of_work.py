"""SQLAlchemy implementation of the user unit of work."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from wms_identity.domain.user.repositories import UserUnitOfWork
from wms_identity.infrastructure.persistence.sqlalchemy.repositories.user_repository import (  # noqa: E501
    UserRepositorySQLAlchemy,
)

logger = logging.getLogger(__name__)


class SQLAlchemyUserUnitOfWork(UserUnitOfWork):
    """Runs one database transaction on a fresh ``AsyncSession``.

    Each ``async with`` block opens its own session, so a single instance
    must not be entered concurrently. Create one per operation.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory
        self._session: AsyncSession | None = None
        self._committed = False

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            msg = "Unit of work has not been entered"
            raise RuntimeError(msg)
        return self._session

    async def __aenter__(self) -> SQLAlchemyUserUnitOfWork:
        self._session = self._session_factory()
        self._committed = False
        self.users = UserRepositorySQLAlchemy(self._session)
        logger.debug("Unit of work started")
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        try:
            if exc_type is not None:
                await self.rollback()
                logger.debug("Unit of work rolled back due to %s", exc_type.__name__)
            elif not self._committed:
                await self.rollback()
        finally:
            await self.session.close()
            self._session = None

    async def commit(self) -> None:
        await self.session.commit()
        self._committed = True
        logger.debug("Unit of work committed")

    async def rollback(self) -> None:
        await self.session.rollback()
        self._committed = False
