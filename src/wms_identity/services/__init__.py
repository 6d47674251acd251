"""Identity services - password hashing."""

from wms_identity.services.password_service import PasswordHashingService

__all__ = [
    "PasswordHashingService",
]
