# ruff: noqa: E501 - Long import paths in __init__.py re-exports
"""SQLAlchemy models for identity management."""

from wms_identity.infrastructure.persistence.sqlalchemy.models.role_model import (
    RoleModel,
    user_roles,
)
from wms_identity.infrastructure.persistence.sqlalchemy.models.user_model import (
    UserModel,
)
from wms_identity.infrastructure.persistence.sqlalchemy.models.user_password_model import (
    UserPasswordModel,
)
from wms_identity.infrastructure.persistence.sqlalchemy.models.user_preference_model import (
    UserPreferenceModel,
)

__all__ = [
    "RoleModel",
    "UserModel",
    "UserPasswordModel",
    "UserPreferenceModel",
    "user_roles",
]
