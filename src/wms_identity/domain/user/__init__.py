"""User domain: identity, profile, roles, preferences and credentials.

This domain handles:
- User aggregate (regular and system users)
- Credential history and the password reuse policy
- Repository and unit of work ports implemented by the persistence layer
"""

from wms_identity.domain.user.exceptions import (
    InvalidArgumentError,
    InvalidPasswordError,
    UsernameAlreadyExistsError,
    UserNotFoundError,
)
from wms_identity.domain.user.value_objects import (
    Role,
    Sex,
    UserDetails,
    UserKind,
    UserPassword,
    UserPreference,
)
from wms_identity.domain.user.aggregates import User
from wms_identity.domain.user.repositories import UserRepository, UserUnitOfWork
from wms_identity.domain.user.services import PasswordHistoryPolicy

__all__ = [
    "InvalidArgumentError",
    "InvalidPasswordError",
    "PasswordHistoryPolicy",
    "Role",
    "Sex",
    "User",
    "UserDetails",
    "UserKind",
    "UserNotFoundError",
    "UserPassword",
    "UserPreference",
    "UserRepository",
    "UserUnitOfWork",
    "UsernameAlreadyExistsError",
]
