"""Authentication services.

Provides password hashing and session token management.
"""

from auth_core.services.password_service import PasswordHashingService
from auth_core.services.token_service import SessionTokenService

__all__ = [
    "PasswordHashingService",
    "SessionTokenService",
]
