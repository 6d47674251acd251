"""WMS Identity - user and credential management.

This package handles the persistence side of user identity:
- User aggregate (profile, details, roles, preferences, image)
- Password history with reuse prevention
- The UserService and its transactional guarantees

Issuing tokens and evaluating permissions are not part of this package.
"""

from wms_identity.application.services import UserService
from wms_identity.domain.user import (
    InvalidArgumentError,
    InvalidPasswordError,
    PasswordHistoryPolicy,
    Role,
    Sex,
    User,
    UserDetails,
    UserKind,
    UsernameAlreadyExistsError,
    UserNotFoundError,
    UserPassword,
    UserPreference,
    UserRepository,
    UserUnitOfWork,
)
from wms_identity.exceptions import ErrorKind, ServiceError
from wms_identity.factory import create_user_service
from wms_identity.services import PasswordHashingService

__all__ = [
    # Domain - User
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
    # Exceptions
    "ErrorKind",
    "ServiceError",
    # Services
    "PasswordHashingService",
    "UserService",
    "create_user_service",
]
