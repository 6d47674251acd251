"""Service-level failures of the user management service.

Every failure of a ``UserService`` operation is raised as a
``ServiceError``. Callers branch on ``ServiceError.kind`` and may inspect
the domain exception in ``ServiceError.cause`` (also chained as
``__cause__``) without matching on message text.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Why a service operation failed."""

    ILLEGAL_ARGUMENT = "illegal_argument"
    USER_NOT_FOUND = "user_not_found"
    INVALID_PASSWORD = "invalid_password"
    PERSISTENCE_FAILURE = "persistence_failure"


class ServiceError(Exception):
    """Uniform failure raised by the user management service."""

    def __init__(
        self,
        kind: ErrorKind,
        message: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        self.kind = kind
        self.cause = cause
        self.message = message or (str(cause) if cause else kind.value)
        super().__init__(self.message)

    @property
    def is_user_not_found(self) -> bool:
        return self.kind == ErrorKind.USER_NOT_FOUND

    @property
    def is_invalid_password(self) -> bool:
        return self.kind == ErrorKind.INVALID_PASSWORD

    def __repr__(self) -> str:
        return f"ServiceError(kind={self.kind.value}, message={self.message!r})"
