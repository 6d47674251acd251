"""Unit tests for how UserRepositorySQLAlchemy reports constraint violations."""

from unittest.mock import AsyncMock, Mock

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from wms_identity.domain.user import Role, User, UsernameAlreadyExistsError
from wms_identity.infrastructure.persistence.sqlalchemy import UserRepositorySQLAlchemy


def _integrity_error(message: str) -> IntegrityError:
    return IntegrityError("INSERT INTO ...", {}, Exception(message))


class TestSaveIntegrityErrors:
    """Only a username clash is reported as UsernameAlreadyExistsError."""

    @pytest.fixture(autouse=True)
    def setup_repository(self):
        self.session = AsyncMock(spec=AsyncSession)
        # No role is stored yet
        self.session.execute.return_value = Mock(
            scalar_one_or_none=Mock(return_value=None),
        )
        self.repository = UserRepositorySQLAlchemy(self.session)

    @pytest.mark.parametrize(
        "message",
        [
            "UNIQUE constraint failed: users.username",
            'duplicate key value violates unique constraint "ix_users_username"\n'
            "DETAIL:  Key (username)=(alice) already exists.",
        ],
    )
    async def test_username_clash(self, message):
        self.session.flush.side_effect = _integrity_error(message)

        with pytest.raises(UsernameAlreadyExistsError) as exc_info:
            await self.repository.save(User.create("alice"))

        assert exc_info.value.username == "alice"
        assert isinstance(exc_info.value.__cause__, IntegrityError)

    @pytest.mark.parametrize(
        "message",
        [
            "UNIQUE constraint failed: roles.name",
            'duplicate key value violates unique constraint "ix_roles_name"\n'
            "DETAIL:  Key (name)=(ROLE_OPERATOR) already exists.",
            "UNIQUE constraint failed: user_preferences.user_id, user_preferences.key",
        ],
    )
    async def test_other_unique_violations_propagate(self, message):
        self.session.flush.side_effect = _integrity_error(message)
        user = User.create("alice")
        user.assign_role(Role("ROLE_OPERATOR"))

        with pytest.raises(IntegrityError):
            await self.repository.save(user)

        assert user.is_new
