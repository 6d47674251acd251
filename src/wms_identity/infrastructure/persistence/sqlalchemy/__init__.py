"""SQLAlchemy implementation for wms_identity persistence.

Provides:
- IdentityBase: Declarative base for identity models
- UserModel, UserPasswordModel, UserPreferenceModel, RoleModel
- UserRepositorySQLAlchemy: Repository implementation for users
- SQLAlchemyUserUnitOfWork: Transaction boundary for the user service
- Engine/session helpers and schema creation
"""

from wms_identity.infrastructure.persistence.sqlalchemy.base import IdentityBase
from wms_identity.infrastructure.persistence.sqlalchemy.database import (
    create_engine,
    create_session_factory,
    create_tables,
    drop_tables,
)
from wms_identity.infrastructure.persistence.sqlalchemy.models import (
    RoleModel,
    UserModel,
    UserPasswordModel,
    UserPreferenceModel,
)
from wms_identity.infrastructure.persistence.sqlalchemy.repositories import (
    SQLAlchemyUserUnitOfWork,
    UserRepositorySQLAlchemy,
)

__all__ = [
    "IdentityBase",
    "RoleModel",
    "SQLAlchemyUserUnitOfWork",
    "UserModel",
    "UserPasswordModel",
    "UserPreferenceModel",
    "UserRepositorySQLAlchemy",
    "create_engine",
    "create_session_factory",
    "create_tables",
    "drop_tables",
]
