"""Unit tests for PasswordHistoryPolicy."""

from datetime import datetime, timezone

import pytest

from wms_identity.domain.user import (
    InvalidArgumentError,
    InvalidPasswordError,
    Role,
    User,
    UserDetails,
    UserPassword,
)


def _user_with_plain_history(*passwords: str) -> User:
    """A persisted user whose history holds unhashed entries."""
    now = datetime.now(tz=timezone.utc)
    return User.reconstitute(
        id=1,
        username="KNOWN",
        fullname=None,
        enabled=True,
        external_user=False,
        details=UserDetails(),
        roles=[],
        preferences=[],
        password_history=[
            UserPassword("KNOWN", password, id=index)
            for index, password in enumerate(passwords, start=1)
        ],
        kind="regular",
        image_loaded=False,
        last_password_change=now,
        created_at=now,
        updated_at=now,
    )


class TestPasswordHistoryPolicy:
    """Tests for password reuse prevention."""

    def test_accepts_novel_password(self, password_policy, password_service):
        user = User.create("KNOWN")

        stored = password_policy.validate_and_accept(user, UserPassword("KNOWN", "pw1"))

        assert user.password_history == (stored,)
        assert user.current_password is stored
        assert password_service.is_hash(stored.password)
        assert password_service.verify("pw1", stored.password)
        assert user.last_password_change == stored.created_at

    def test_stored_form_is_not_plaintext(self, password_policy):
        user = User.create("KNOWN")

        stored = password_policy.validate_and_accept(user, UserPassword("KNOWN", "pw1"))

        assert stored.password != "pw1"

    def test_rejects_reuse_of_current_password(self, password_policy):
        user = User.create("KNOWN")
        password_policy.validate_and_accept(user, UserPassword("KNOWN", "pw1"))

        with pytest.raises(InvalidPasswordError) as exc_info:
            password_policy.validate_and_accept(user, UserPassword("KNOWN", "pw1"))

        assert exc_info.value.username == "KNOWN"
        assert len(user.password_history) == 1

    def test_rejects_reuse_of_older_password(self, password_policy):
        user = User.create("KNOWN")
        password_policy.validate_and_accept(user, UserPassword("KNOWN", "pw1"))
        password_policy.validate_and_accept(user, UserPassword("KNOWN", "pw2"))

        with pytest.raises(InvalidPasswordError):
            password_policy.validate_and_accept(user, UserPassword("KNOWN", "pw1"))

        assert len(user.password_history) == 2

    def test_history_is_never_truncated(self, password_policy):
        user = User.create("KNOWN")
        for index in range(8):
            password_policy.validate_and_accept(
                user,
                UserPassword("KNOWN", f"pw{index}"),
            )

        assert len(user.password_history) == 8
        with pytest.raises(InvalidPasswordError):
            password_policy.validate_and_accept(user, UserPassword("KNOWN", "pw0"))

    def test_rejects_reuse_of_plain_entry(self, password_policy):
        user = _user_with_plain_history("pw1", "pw2")

        with pytest.raises(InvalidPasswordError):
            password_policy.validate_and_accept(user, UserPassword("KNOWN", "pw1"))

    def test_appends_after_plain_entries(self, password_policy):
        user = _user_with_plain_history("pw1", "pw2")

        password_policy.validate_and_accept(user, UserPassword("KNOWN", "pw3"))

        assert len(user.password_history) == 3
        assert [p.password for p in user.password_history[:2]] == ["pw1", "pw2"]

    def test_rejects_credential_of_other_user(self, password_policy):
        user = User.create("KNOWN")

        with pytest.raises(InvalidArgumentError):
            password_policy.validate_and_accept(user, UserPassword("OTHER", "pw1"))
        assert user.password_history == ()

    def test_rejects_system_user(self, password_policy):
        user = User.create_system_user("system", Role("ROLE_SYSTEM"))

        with pytest.raises(InvalidArgumentError):
            password_policy.validate_and_accept(user, UserPassword("system", "pw1"))
        assert user.password_history == ()

    def test_was_used_before(self, password_policy):
        user = User.create("KNOWN")
        password_policy.validate_and_accept(user, UserPassword("KNOWN", "pw1"))

        assert password_policy.was_used_before(user, UserPassword("KNOWN", "pw1"))
        assert not password_policy.was_used_before(user, UserPassword("KNOWN", "pw2"))
