"""User preference value object."""

from dataclasses import dataclass, field, replace
from typing import Optional

from wms_identity.domain.user.exceptions import InvalidArgumentError


@dataclass(frozen=True)
class UserPreference:
    """A single key/value preference of a user, unique per (username, key)."""

    username: Optional[str]
    key: str
    value: Optional[str] = field(default=None, compare=False)
    description: Optional[str] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not self.key or not self.key.strip():
            msg = "Preference key cannot be empty"
            raise InvalidArgumentError(msg)

    def owned_by(self, username: str) -> "UserPreference":
        return replace(self, username=username)
