"""Centralized exception handlers for the FastAPI application.

This module is the only place where authentication errors become HTTP
responses. The mapping is a security contract, not a convenience:

- ``USER_NOT_FOUND`` and ``INVALID_CREDENTIALS`` produce byte-identical
  responses, so a client cannot tell whether an account exists.
- ``SESSION_NOT_FOUND`` and ``SESSION_EXPIRED`` produce identical responses.
- Hashing and persistence failures produce a generic 500; their messages
  are logged and never returned.

Error Response Format:
    {
        "detail": "Human-readable error message",
        "code": "MACHINE_READABLE_ERROR_CODE"
    }
"""

import logging
from dataclasses import dataclass

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from auth_core.exceptions import AuthError, AuthInfrastructureError, ErrorCode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PublicError:
    """What a client is allowed to see about a failure."""

    status_code: int
    detail: str
    code: str


INVALID_CREDENTIALS = PublicError(
    status.HTTP_401_UNAUTHORIZED,
    "Invalid credentials",
    "INVALID_CREDENTIALS",
)
INVALID_TOKEN = PublicError(
    status.HTTP_401_UNAUTHORIZED,
    "Invalid or expired token",
    "INVALID_TOKEN",
)
INTERNAL_ERROR = PublicError(
    status.HTTP_500_INTERNAL_SERVER_ERROR,
    "Internal server error",
    "INTERNAL_ERROR",
)


# =============================================================================
# Error Code to Public Error Mapping
# =============================================================================

ERROR_CODE_TO_PUBLIC: dict[ErrorCode, PublicError] = {
    # 401 - never reveal whether the username exists
    ErrorCode.USER_NOT_FOUND: INVALID_CREDENTIALS,
    ErrorCode.INVALID_CREDENTIALS: INVALID_CREDENTIALS,
    # 401 - missing and expired sessions look the same
    ErrorCode.SESSION_NOT_FOUND: INVALID_TOKEN,
    ErrorCode.SESSION_EXPIRED: INVALID_TOKEN,
    # 403 - reserved kinds
    ErrorCode.PASSWORD_EXPIRED: PublicError(
        status.HTTP_403_FORBIDDEN,
        "Password expired",
        "PASSWORD_EXPIRED",
    ),
    ErrorCode.ACCOUNT_LOCKED: PublicError(
        status.HTTP_403_FORBIDDEN,
        "Account locked",
        "ACCOUNT_LOCKED",
    ),
    ErrorCode.UNAUTHORIZED: PublicError(
        status.HTTP_403_FORBIDDEN,
        "Unauthorized",
        "UNAUTHORIZED",
    ),
    # 409 Conflict
    ErrorCode.USER_ALREADY_EXISTS: PublicError(
        status.HTTP_409_CONFLICT,
        "Username or email already exists",
        "USER_ALREADY_EXISTS",
    ),
    # 500 - infrastructure
    ErrorCode.HASHING_FAILED: INTERNAL_ERROR,
    ErrorCode.PERSISTENCE_FAILURE: INTERNAL_ERROR,
}


def public_error_for(exc: Exception) -> PublicError:
    """Return the client-facing status, message and code for ``exc``."""
    if isinstance(exc, AuthInfrastructureError):
        return INTERNAL_ERROR
    if isinstance(exc, AuthError):
        return ERROR_CODE_TO_PUBLIC.get(exc.code, INTERNAL_ERROR)
    return INTERNAL_ERROR


def _create_error_response(error: PublicError) -> JSONResponse:
    """Create a standardized error response."""
    headers = None
    if error.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=error.status_code,
        content={
            "detail": error.detail,
            "code": error.code,
        },
        headers=headers,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI application.

    Parameters
    ----------
    app
        The FastAPI application instance
    """

    @app.exception_handler(AuthError)
    async def auth_exception_handler(
        request: Request,
        exc: AuthError,
    ) -> JSONResponse:
        """Handle authentication errors.

        Logs the internal kind, which the response deliberately hides.
        """
        error = public_error_for(exc)

        if isinstance(exc, AuthInfrastructureError):
            logger.error(
                "Auth infrastructure failure on %s %s: %s (code=%s)",
                request.method,
                request.url.path,
                exc.message,
                exc.code.value,
                exc_info=exc,
            )
        else:
            logger.warning(
                "Auth error on %s %s: %s (code=%s, public=%s)",
                request.method,
                request.url.path,
                exc.message,
                exc.code.value,
                error.code,
            )

        return _create_error_response(error)

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unhandled exceptions with consistent error format."""
        logger.exception(
            "Unhandled exception on %s %s: %s",
            request.method,
            request.url.path,
            exc,
        )
        return _create_error_response(INTERNAL_ERROR)
