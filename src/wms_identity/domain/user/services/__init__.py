"""Domain services of the user domain."""

from wms_identity.domain.user.services.password_history_policy import (
    PasswordHistoryPolicy,
)

__all__ = ["PasswordHistoryPolicy"]
