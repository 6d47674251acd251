"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from wms_identity.domain.user.aggregates.user import User


class UserRepository(ABC):
    """Repository interface for User aggregates.

    Lookups never return ``None`` for a missing user; they raise
    ``UserNotFoundError`` instead.
    """

    @abstractmethod
    async def find_by_username(self, username: str, *, with_image: bool = False) -> User:
        """Find a user by username.

        The profile image stays in the store unless ``with_image`` is set;
        use ``load_image`` to fetch it later.

        Raises
        ------
        UserNotFoundError
            If no persisted user has this username.
        """

    @abstractmethod
    async def find_all(self) -> list[User]:
        """List all persisted users ordered by username."""

    @abstractmethod
    async def exists(self, username: str) -> bool:
        """Check if a persisted user has the given username."""

    @abstractmethod
    async def save(self, user: User) -> User:
        """Insert a new user or update a persisted one.

        Assigns the persistent identity on the passed aggregate the first
        time it is saved and returns it.

        Raises
        ------
        UsernameAlreadyExistsError
            If a new user collides with a persisted username.
        """

    @abstractmethod
    async def remove(self, user: User) -> None:
        """Remove a user with its preferences and password history.

        Raises
        ------
        UserNotFoundError
            If the user has no persisted identity or is already gone.
        """

    @abstractmethod
    async def load_image(self, user: User) -> Optional[bytes]:
        """Fetch the profile image of a persisted user onto the aggregate."""
