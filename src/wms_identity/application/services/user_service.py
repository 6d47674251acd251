"""Application service managing the lifecycle of users.

Each mutating operation runs in exactly one unit of work: either all of
its changes are committed or none are. Failures are raised as a single
``ServiceError`` type whose ``kind`` tells callers what went wrong.
"""

from __future__ import annotations

import copy
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable, Optional

from sqlalchemy.exc import SQLAlchemyError

from wms_config.settings import Settings, get_settings
from wms_identity.domain.user import (
    InvalidArgumentError,
    InvalidPasswordError,
    PasswordHistoryPolicy,
    Role,
    User,
    UsernameAlreadyExistsError,
    UserNotFoundError,
    UserPassword,
    UserPreference,
    UserRepository,
    UserUnitOfWork,
)
from wms_identity.exceptions import ErrorKind, ServiceError

logger = logging.getLogger(__name__)

UnitOfWorkFactory = Callable[[], UserUnitOfWork]


@asynccontextmanager
async def _translate_errors(operation: str) -> AsyncIterator[None]:
    """Raise every failure of ``operation`` as a ServiceError."""
    try:
        yield
    except ServiceError:
        raise
    except InvalidArgumentError as e:
        raise ServiceError(ErrorKind.ILLEGAL_ARGUMENT, cause=e) from e
    except UserNotFoundError as e:
        logger.warning("%s failed, user not found: %s", operation, e.username)
        raise ServiceError(ErrorKind.USER_NOT_FOUND, cause=e) from e
    except InvalidPasswordError as e:
        raise ServiceError(ErrorKind.INVALID_PASSWORD, cause=e) from e
    except (UsernameAlreadyExistsError, SQLAlchemyError) as e:
        logger.error("%s failed in the user store: %s", operation, e)
        raise ServiceError(ErrorKind.PERSISTENCE_FAILURE, cause=e) from e


def _illegal_argument(message: str) -> ServiceError:
    cause = InvalidArgumentError(message)
    error = ServiceError(ErrorKind.ILLEGAL_ARGUMENT, cause=cause)
    error.__cause__ = cause
    return error


class UserService:
    """Create, update, remove and query users and their credentials."""

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        password_policy: PasswordHistoryPolicy,
        settings: Optional[Settings] = None,
    ):
        self._uow_factory = unit_of_work_factory
        self._password_policy = password_policy
        self._settings = settings or get_settings()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def save(self, user: User) -> User:
        """Persist a new user or update a persisted one.

        A new user whose username is already taken is merged onto the
        persisted record instead of creating a duplicate.
        """
        if user is None:
            raise _illegal_argument("User to save must not be None")
        self._ensure_not_removed(user)

        async with _translate_errors("save"):
            async with self._uow_factory() as uow:
                target = await self._resolve(uow.users, user)
                saved = await uow.users.save(target)
                await uow.commit()
        return saved

    async def remove(self, user: User) -> None:
        """Remove a user together with its preferences and password history."""
        if user is None:
            raise _illegal_argument("User to remove must not be None")

        async with _translate_errors("remove"):
            async with self._uow_factory() as uow:
                if user.is_new:
                    target = await uow.users.find_by_username(user.username)
                else:
                    target = copy.copy(user)
                await uow.users.remove(target)
                await uow.commit()

        user.mark_removed()

    async def change_user_password(self, credential: UserPassword) -> User:
        """Add a new password to the history of its owner.

        Raises
        ------
        ServiceError
            ``USER_NOT_FOUND`` if the owner is unknown, ``INVALID_PASSWORD``
            (with the ``InvalidPasswordError`` as cause) if the password was
            used before.
        """
        if credential is None:
            raise _illegal_argument("Password to change must not be None")

        async with _translate_errors("change_user_password"):
            async with self._uow_factory() as uow:
                user = await uow.users.find_by_username(credential.username)
                self._password_policy.validate_and_accept(user, credential)
                saved = await uow.users.save(user)
                await uow.commit()

        logger.info("Changed password of user: %s", credential.username)
        return saved

    async def upload_image_file(self, username: str, image: bytes) -> None:
        """Replace the profile image of a user."""
        if not username:
            raise _illegal_argument("Username must not be empty")
        if image is None:
            raise _illegal_argument("Image must not be None")

        async with _translate_errors("upload_image_file"):
            async with self._uow_factory() as uow:
                user = await uow.users.find_by_username(username)
                user.upload_image(image)
                await uow.users.save(user)
                await uow.commit()

        logger.debug("Stored image of %d bytes for user: %s", len(image), username)

    async def save_user_profile(
        self,
        user: User,
        credential: Optional[UserPassword] = None,
        *preferences: UserPreference,
    ) -> User:
        """Save a user, an optional new password and preferences atomically.

        A rejected password aborts the whole operation: neither the profile
        changes nor the preferences are stored.
        """
        if user is None:
            raise _illegal_argument("User to save must not be None")
        self._ensure_not_removed(user)

        async with _translate_errors("save_user_profile"):
            async with self._uow_factory() as uow:
                target = await self._resolve(uow.users, user)
                for preference in preferences:
                    if preference is None:
                        msg = "Preference must not be None"
                        raise InvalidArgumentError(msg)
                    target.set_preference(preference)
                if credential is not None:
                    self._password_policy.validate_and_accept(target, credential)
                saved = await uow.users.save(target)
                await uow.commit()

        logger.debug(
            "Saved profile of user %s (password changed: %s, preferences: %d)",
            saved.username,
            credential is not None,
            len(preferences),
        )
        return saved

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def find_all(self) -> list[User]:
        async with _translate_errors("find_all"):
            async with self._uow_factory() as uow:
                return await uow.users.find_all()

    async def find_by_username(self, username: str, *, with_image: bool = False) -> User:
        if not username:
            raise _illegal_argument("Username must not be empty")

        async with _translate_errors("find_by_username"):
            async with self._uow_factory() as uow:
                return await uow.users.find_by_username(username, with_image=with_image)

    def get_template(self, username: str) -> User:
        """Return a new, unsaved user carrying only the given username."""
        try:
            return User.create(username)
        except InvalidArgumentError as e:
            raise ServiceError(ErrorKind.ILLEGAL_ARGUMENT, cause=e) from e

    def create_system_user(self) -> User:
        """Return a new, unsaved system user with its single system role."""
        role = Role(
            name=self._settings.system_role_name,
            description=self._settings.system_role_description,
        )
        return User.create_system_user(self._settings.system_user_name, role)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _resolve(self, users: UserRepository, user: User) -> User:
        """Return the aggregate the operation should mutate and save.

        Works on a copy so the caller's instance stays untouched when the
        transaction is rolled back. Passwords the caller recorded itself are
        never stored; only the password history policy adds to the history.
        """
        if user.is_new and not await users.exists(user.username):
            target = copy.deepcopy(user)
            discarded = target.discard_unsaved_passwords()
            if discarded:
                logger.warning(
                    "Ignored %d unaccepted password(s) of new user: %s",
                    discarded,
                    user.username,
                )
            return target

        persisted = await users.find_by_username(user.username)
        persisted.merge_from(user)
        return persisted

    @staticmethod
    def _ensure_not_removed(user: User) -> None:
        if user.is_removed:
            raise _illegal_argument(f"User {user.username} has been removed")
