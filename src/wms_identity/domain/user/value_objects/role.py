"""Role value object."""

from dataclasses import dataclass, field
from typing import Optional

from wms_identity.domain.user.exceptions import InvalidArgumentError


@dataclass(frozen=True)
class Role:
    """A named group of users. Two roles are equal when their names are."""

    name: str
    description: Optional[str] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            msg = "Role name cannot be empty"
            raise InvalidArgumentError(msg)
        object.__setattr__(self, "name", self.name.strip())

    def __str__(self) -> str:
        return self.name
