"""SQLAlchemy implementation of UserRepository."""

import logging
from typing import Optional

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import undefer

from wms_identity.domain.shared.time import ensure_tz_aware
from wms_identity.domain.user import (
    Role,
    User,
    UserDetails,
    UsernameAlreadyExistsError,
    UserNotFoundError,
    UserPassword,
    UserPreference,
    UserRepository,
)
from wms_identity.infrastructure.persistence.sqlalchemy.models import (
    RoleModel,
    UserModel,
    UserPasswordModel,
    UserPreferenceModel,
)

logger = logging.getLogger(__name__)

# How SQLite and PostgreSQL name the unique username constraint
USERNAME_CONSTRAINT_MARKERS = ("users.username", "ix_users_username", "Key (username)")


def _is_username_violation(error: IntegrityError) -> bool:
    message = str(error.orig) if error.orig is not None else str(error)
    return any(marker in message for marker in USERNAME_CONSTRAINT_MARKERS)


class UserRepositorySQLAlchemy(UserRepository):
    """SQLAlchemy implementation of the UserRepository interface.

    Flushes but never commits; the unit of work owns the transaction.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_username(self, username: str, *, with_image: bool = False) -> User:
        model = await self._find_model_by_username(username, with_image=with_image)

        if model is None:
            raise UserNotFoundError(username)

        return self._map_to_domain(model, with_image=with_image)

    async def find_all(self) -> list[User]:
        stmt = select(UserModel).order_by(UserModel.username)
        result = await self._session.execute(stmt)
        models = result.scalars().all()
        return [self._map_to_domain(model) for model in models]

    async def exists(self, username: str) -> bool:
        stmt = select(exists().where(UserModel.username == username))
        result = await self._session.execute(stmt)
        return bool(result.scalar())

    async def save(self, user: User) -> User:
        new_passwords = [
            (credential, self._map_password_to_model(credential))
            for credential in user.password_history
            if credential.is_new
        ]

        try:
            if user.is_new:
                model = await self._insert(user)
                model.passwords = [m for _, m in new_passwords]
            else:
                model = await self._find_model_by_id(user.id)
                if model is None:
                    raise UserNotFoundError(user.username)
                await self._update_model(model, user)
                # History is append-only: only entries without an id are new
                model.passwords.extend(m for _, m in new_passwords)
                logger.debug("Updated user: %s", user.username)

            await self._session.flush()
        except IntegrityError as e:
            if _is_username_violation(e):
                raise UsernameAlreadyExistsError(user.username) from e
            raise

        if user.is_new:
            user.mark_persisted(model.id)
            logger.info("Created user: %s (id: %s)", user.username, model.id)
        for credential, password_model in new_passwords:
            user.mark_password_persisted(credential, password_model.id)
        return user

    async def remove(self, user: User) -> None:
        if user.is_new:
            raise UserNotFoundError(user.username)

        model = await self._find_model_by_id(user.id)
        if model is None:
            raise UserNotFoundError(user.username)

        await self._session.delete(model)
        await self._session.flush()
        user.mark_removed()
        logger.info("Deleted user with preferences and password history: %s", user.username)

    async def load_image(self, user: User) -> Optional[bytes]:
        if user.is_new:
            raise UserNotFoundError(user.username)

        stmt = select(UserModel.image).where(UserModel.id == user.id)
        result = await self._session.execute(stmt)
        row = result.one_or_none()
        if row is None:
            raise UserNotFoundError(user.username)

        user.attach_loaded_image(row.image)
        return row.image

    async def _find_model_by_username(
        self,
        username: str,
        *,
        with_image: bool = False,
    ) -> UserModel | None:
        stmt = select(UserModel).where(UserModel.username == username)
        if with_image:
            # Refresh instances already in the identity map without the image
            stmt = stmt.options(undefer(UserModel.image)).execution_options(
                populate_existing=True,
            )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def _find_model_by_id(self, user_id: int) -> UserModel | None:
        stmt = select(UserModel).where(UserModel.id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def _get_or_create_role(self, role: Role) -> RoleModel:
        stmt = select(RoleModel).where(RoleModel.name == role.name)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            model = RoleModel(name=role.name, description=role.description)
            self._session.add(model)
            logger.info("Created role: %s", role.name)
        elif role.description is not None:
            model.description = role.description
        return model

    async def _insert(self, user: User) -> UserModel:
        model = UserModel(
            username=user.username,
            kind=user.kind.value,
            created_at=user.created_at,
            updated_at=user.updated_at,
            image=user.image,
        )
        self._apply_scalars(model, user)
        model.roles = [await self._get_or_create_role(r) for r in user.roles]
        model.preferences = [self._map_preference_to_model(p) for p in user.preferences]
        self._session.add(model)
        return model

    async def _update_model(self, model: UserModel, user: User) -> None:
        self._apply_scalars(model, user)
        model.updated_at = user.updated_at
        if user.image_loaded:
            model.image = user.image

        model.roles = [await self._get_or_create_role(r) for r in user.roles]
        self._sync_preferences(model, user)

    def _apply_scalars(self, model: UserModel, user: User) -> None:
        details = user.details
        model.fullname = user.fullname
        model.enabled = user.enabled
        model.external_user = user.external_user
        model.last_password_change = user.last_password_change
        model.description = details.description
        model.comment = details.comment
        model.phone_no = details.phone_no
        model.im_handle = details.im_handle
        model.office = details.office
        model.department = details.department
        model.sex = details.sex.value if details.sex else None

    def _sync_preferences(self, model: UserModel, user: User) -> None:
        wanted = {p.key: p for p in user.preferences}
        existing = {p.key: p for p in model.preferences}

        for key, preference_model in existing.items():
            if key not in wanted:
                model.preferences.remove(preference_model)

        for key, preference in wanted.items():
            preference_model = existing.get(key)
            if preference_model is None:
                model.preferences.append(self._map_preference_to_model(preference))
            else:
                preference_model.value = preference.value
                preference_model.description = preference.description

    def _map_to_domain(self, model: UserModel, *, with_image: bool = False) -> User:
        details = UserDetails(
            description=model.description,
            comment=model.comment,
            phone_no=model.phone_no,
            im_handle=model.im_handle,
            office=model.office,
            department=model.department,
            sex=model.sex,
            image=model.image if with_image else None,
        )
        return User.reconstitute(
            id=model.id,
            username=model.username,
            fullname=model.fullname,
            enabled=model.enabled,
            external_user=model.external_user,
            details=details,
            roles=[Role(name=r.name, description=r.description) for r in model.roles],
            preferences=[
                UserPreference(
                    username=p.username,
                    key=p.key,
                    value=p.value,
                    description=p.description,
                )
                for p in model.preferences
            ],
            password_history=[
                UserPassword(
                    username=p.username,
                    password=p.password,
                    created_at=ensure_tz_aware(p.created_at),
                    id=p.id,
                )
                for p in model.passwords
            ],
            kind=model.kind,
            image_loaded=with_image,
            last_password_change=ensure_tz_aware(model.last_password_change),
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )

    def _map_preference_to_model(self, preference: UserPreference) -> UserPreferenceModel:
        return UserPreferenceModel(
            username=preference.username,
            key=preference.key,
            value=preference.value,
            description=preference.description,
        )

    def _map_password_to_model(self, credential: UserPassword) -> UserPasswordModel:
        return UserPasswordModel(
            username=credential.username,
            password=credential.password,
            created_at=credential.created_at,
        )
