"""Decides whether a new password may be added to a user's history."""

import logging

from wms_identity.domain.user.aggregates.user import User
from wms_identity.domain.user.exceptions import (
    InvalidArgumentError,
    InvalidPasswordError,
)
from wms_identity.domain.user.value_objects import UserPassword
from wms_identity.services.password_service import PasswordHashingService

logger = logging.getLogger(__name__)


class PasswordHistoryPolicy:
    """Reject any password the user has ever had.

    The whole history is checked, not only the last few entries, and
    accepted passwords are appended without truncating older ones.
    The policy only mutates the user passed in; persisting it is the
    caller's job.
    """

    def __init__(self, password_service: PasswordHashingService):
        self._password_service = password_service

    def validate_and_accept(self, user: User, credential: UserPassword) -> UserPassword:
        """Append ``credential`` to the history of ``user``.

        Returns
        -------
        The credential in its stored (hashed) form.

        Raises
        ------
        InvalidArgumentError
            If the credential belongs to another user or the user is the
            system user.
        InvalidPasswordError
            If the password was used before by this user.
        """
        if credential.username != user.username:
            msg = (
                f"Password of user {credential.username} cannot be set "
                f"for user {user.username}"
            )
            raise InvalidArgumentError(msg)

        if user.is_system_user:
            msg = f"Password of system user {user.username} cannot be changed"
            raise InvalidArgumentError(msg)

        if self.was_used_before(user, credential):
            logger.warning("Rejected reused password for user: %s", user.username)
            raise InvalidPasswordError(user.username)

        stored = credential.with_password(
            self._password_service.hash(credential.password),
        )
        user.record_password(stored)
        logger.debug(
            "Accepted new password for user %s (%d in history)",
            user.username,
            len(user.password_history),
        )
        return stored

    def was_used_before(self, user: User, credential: UserPassword) -> bool:
        return any(self._matches(credential, entry) for entry in user.password_history)

    def _matches(self, credential: UserPassword, entry: UserPassword) -> bool:
        if credential == entry:
            return True
        if not self._password_service.is_hash(entry.password):
            return False
        return self._password_service.verify(credential.password, entry.password)
