"""Wiring helpers for building a ready-to-use UserService."""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from wms_config.settings import Settings, get_settings
from wms_identity.application.services import UserService
from wms_identity.domain.user import PasswordHistoryPolicy
from wms_identity.infrastructure.persistence.sqlalchemy import SQLAlchemyUserUnitOfWork
from wms_identity.services import PasswordHashingService


def create_user_service(
    session_factory: async_sessionmaker[AsyncSession],
    settings: Optional[Settings] = None,
) -> UserService:
    """Build a UserService backed by the SQLAlchemy unit of work."""
    settings = settings or get_settings()
    password_service = PasswordHashingService(rounds=settings.password_hash_rounds)
    return UserService(
        unit_of_work_factory=lambda: SQLAlchemyUserUnitOfWork(session_factory),
        password_policy=PasswordHistoryPolicy(password_service),
        settings=settings,
    )
