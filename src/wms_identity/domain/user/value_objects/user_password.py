"""Credential value object used for the password history."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import TYPE_CHECKING, Optional, Union

from wms_identity.domain.shared.time import utc_now
from wms_identity.domain.user.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from wms_identity.domain.user.aggregates.user import User


@dataclass(frozen=True)
class UserPassword:
    """A password a user has set, together with the time it was set.

    Equality is on ``(username, password)`` only. That is what the history
    policy relies on to detect a password being reused.

    ``password`` is the raw value when the credential enters the system and
    the stored (hashed) form once it has been accepted into a user's history.
    """

    username: str
    password: str = field(repr=False)
    created_at: datetime = field(default_factory=utc_now, compare=False)
    id: Optional[int] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not self.username:
            msg = "A password must belong to a user"
            raise InvalidArgumentError(msg)
        if not self.password:
            msg = "Password cannot be empty"
            raise InvalidArgumentError(msg)

    @classmethod
    def for_user(cls, user: Union[User, str], password: str) -> UserPassword:
        if user is None:
            msg = "A password must belong to a user"
            raise InvalidArgumentError(msg)
        username = user if isinstance(user, str) else user.username
        return cls(username=username, password=password)

    def with_password(self, password: str) -> UserPassword:
        """Copy carrying another representation of the same password."""
        return replace(self, password=password)

    def with_id(self, id: int) -> UserPassword:
        return replace(self, id=id)

    @property
    def is_new(self) -> bool:
        return self.id is None

    def __str__(self) -> str:
        return f"UserPassword({self.username}, created_at={self.created_at})"
