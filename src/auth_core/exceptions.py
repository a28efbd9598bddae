"""Authentication exceptions and error codes.

These exceptions are raised by the auth_core package and the
AuthenticationService. They classify a failure; they do not decide how it
is shown to a client. The presentation layer owns that mapping and must
collapse some kinds into one public response:

- ``UserNotFoundError`` and ``InvalidCredentialsError`` map to the same
  "invalid credentials" response so that account existence is not revealed.
- ``SessionNotFoundError`` and ``SessionExpiredError`` map to the same
  unauthorized response.
- ``AuthInfrastructureError`` subclasses map to a generic server failure and
  their messages are never returned to clients.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Stable internal error codes.

    These identify the precise failure kind for logs and telemetry.
    The public code sent to clients is chosen by the exception handlers.
    """

    # Caller-input problems
    USER_NOT_FOUND = "USER_NOT_FOUND"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    PASSWORD_EXPIRED = "PASSWORD_EXPIRED"
    ACCOUNT_LOCKED = "ACCOUNT_LOCKED"
    UNAUTHORIZED = "UNAUTHORIZED"
    USER_ALREADY_EXISTS = "USER_ALREADY_EXISTS"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    SESSION_EXPIRED = "SESSION_EXPIRED"

    # Infrastructure problems
    HASHING_FAILED = "HASHING_FAILED"
    PERSISTENCE_FAILURE = "PERSISTENCE_FAILURE"


class AuthError(Exception):
    """Base exception for all authentication errors.

    Attributes
    ----------
    message
        Human-readable error message (internal, may contain identifiers)
    code
        Stable error code for programmatic handling
    details
        Optional additional context (logged but not exposed to users)
    """

    default_message = "Authentication error"
    default_code = ErrorCode.UNAUTHORIZED

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message or self.default_message
        self.code = self.default_code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code.value!r}, "
            f"details={self.details!r})"
        )


class UserNotFoundError(AuthError):
    """Raised when no user matches the given username during login."""

    default_message = "User not found"
    default_code = ErrorCode.USER_NOT_FOUND


class InvalidCredentialsError(AuthError):
    """Raised when the password does not match the stored hash."""

    default_message = "Invalid credentials"
    default_code = ErrorCode.INVALID_CREDENTIALS


class PasswordExpiredError(AuthError):
    """Reserved: the user's password has expired and must be reset."""

    default_message = "Password expired"
    default_code = ErrorCode.PASSWORD_EXPIRED


class AccountLockedError(AuthError):
    """Reserved: the account is locked."""

    default_message = "Account locked"
    default_code = ErrorCode.ACCOUNT_LOCKED


class UnauthorizedError(AuthError):
    """Reserved: the caller may not perform the operation."""

    default_message = "Unauthorized access"
    default_code = ErrorCode.UNAUTHORIZED


class UserAlreadyExistsError(AuthError):
    """Raised when the username or email is already registered."""

    default_message = "User already exists"
    default_code = ErrorCode.USER_ALREADY_EXISTS

    def __init__(
        self,
        username: str | None = None,
        email: str | None = None,
        message: str | None = None,
    ):
        self.username = username
        self.email = email
        super().__init__(
            message or f"User already exists: {username!r} / {email!r}",
            details={"username": username, "email": email},
        )


class SessionNotFoundError(AuthError):
    """Raised when a bearer token does not match any session."""

    default_message = "Session not found"
    default_code = ErrorCode.SESSION_NOT_FOUND


class SessionExpiredError(AuthError):
    """Raised when a session exists but its expiry has passed."""

    default_message = "Session expired"
    default_code = ErrorCode.SESSION_EXPIRED


class AuthInfrastructureError(AuthError):
    """Base for failures of hashing or storage, as opposed to bad input."""

    default_message = "Authentication infrastructure failure"
    default_code = ErrorCode.PERSISTENCE_FAILURE


class HashingFailedError(AuthInfrastructureError):
    """Raised when a password cannot be hashed or a digest is malformed."""

    default_message = "Password hashing failed"
    default_code = ErrorCode.HASHING_FAILED


class PersistenceError(AuthInfrastructureError):
    """Raised when a store operation fails for a reason other than a conflict."""

    default_message = "Persistence failure"
    default_code = ErrorCode.PERSISTENCE_FAILURE

    def __init__(self, operation: str, message: str | None = None):
        self.operation = operation
        super().__init__(
            message or f"Store operation failed: {operation}",
            details={"operation": operation},
        )
