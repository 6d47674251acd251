"""User domain exceptions.

Custom exceptions for the user domain, used for validation
and business rule violations.
"""


class InvalidArgumentError(ValueError):
    """Raised when a required value is missing or structurally invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class UserNotFoundError(Exception):
    """User not found."""

    def __init__(self, username: str | None) -> None:
        self.username = username
        super().__init__(f"User not found: {username}")


class UsernameAlreadyExistsError(Exception):
    """Username already taken by another persisted user."""

    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__(f"Username already exists: {username}")


class InvalidPasswordError(Exception):
    """Password was rejected by the password history policy."""

    def __init__(self, username: str, message: str | None = None) -> None:
        self.username = username
        super().__init__(
            message or f"Password has already been used by user: {username}",
        )
