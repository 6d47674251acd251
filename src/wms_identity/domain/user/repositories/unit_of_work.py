"""Unit of work interface for user management transactions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType
from typing import Optional

from wms_identity.domain.user.repositories.user_repository import UserRepository


class UserUnitOfWork(ABC):
    """One atomic transaction against the user store.

    Usage::

        async with uow_factory() as uow:
            user = await uow.users.find_by_username("alice")
            ...
            await uow.users.save(user)
            await uow.commit()

    Leaving the block without ``commit`` or because of an exception rolls
    every change back.
    """

    users: UserRepository

    @abstractmethod
    async def __aenter__(self) -> UserUnitOfWork:
        """Begin the transaction."""

    @abstractmethod
    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        """End the transaction, rolling back unless committed."""

    @abstractmethod
    async def commit(self) -> None:
        """Commit all changes made within this unit of work."""

    @abstractmethod
    async def rollback(self) -> None:
        """Discard all changes made within this unit of work."""
