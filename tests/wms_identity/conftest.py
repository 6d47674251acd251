"""Shared fixtures for wms_identity tests."""

import pytest

from wms_identity.domain.user import PasswordHistoryPolicy, Role, Sex, User
from wms_identity.services import PasswordHashingService

KNOWN_USERNAME = "KNOWN"
UNKNOWN_USERNAME = "UNKNOWN"
TEST_USERNAME = "TEST"


@pytest.fixture
def password_service() -> PasswordHashingService:
    """bcrypt at the minimum work factor."""
    return PasswordHashingService(rounds=4)


@pytest.fixture
def password_policy(password_service) -> PasswordHistoryPolicy:
    return PasswordHistoryPolicy(password_service)


@pytest.fixture
def known_user() -> User:
    """A transient regular user with some profile data."""
    user = User.create(KNOWN_USERNAME, fullname="Known User")
    user.update_details(department="Logistics", office="A-12", sex=Sex.MALE)
    user.assign_role(Role("ROLE_OPERATOR", "Warehouse operators"))
    return user


@pytest.fixture
def test_user() -> User:
    return User.create(TEST_USERNAME)
