"""Application services for identity management."""

from wms_identity.application.services.user_service import UserService

__all__ = ["UserService"]
