"""Application services."""

from auth_service.application.services.authentication_service import (
    AuthenticationService,
)

__all__ = ["AuthenticationService"]
