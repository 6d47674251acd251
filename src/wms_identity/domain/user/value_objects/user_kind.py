from enum import Enum


class UserKind(str, Enum):
    """Discriminates regular users from the built-in system user."""

    REGULAR = "regular"
    SYSTEM = "system"
