"""Value objects of the user domain."""

from wms_identity.domain.user.value_objects.role import Role
from wms_identity.domain.user.value_objects.user_details import Sex, UserDetails
from wms_identity.domain.user.value_objects.user_kind import UserKind
from wms_identity.domain.user.value_objects.user_password import UserPassword
from wms_identity.domain.user.value_objects.user_preference import UserPreference

__all__ = [
    "Role",
    "Sex",
    "UserDetails",
    "UserKind",
    "UserPassword",
    "UserPreference",
]
