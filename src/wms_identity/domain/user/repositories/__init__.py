from wms_identity.domain.user.repositories.unit_of_work import UserUnitOfWork
from wms_identity.domain.user.repositories.user_repository import UserRepository

__all__ = ["UserRepository", "UserUnitOfWork"]
