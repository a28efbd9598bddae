"""Authentication router for login, registration and token resolution."""

import logging

from fastapi import APIRouter, status

from auth_service.presentation.api.dependencies import AuthService, BearerToken
from auth_service.presentation.api.schemas.auth import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/login",
    summary="Login with username and password",
    responses={
        200: {"description": "Login successful"},
        401: {"description": "Invalid credentials"},
    },
)
async def login(request: LoginRequest, auth_service: AuthService) -> AuthResponse:
    """
    Authenticate a user and issue a session token.

    An unknown username and a wrong password produce the same response.
    """
    result = await auth_service.login(request.to_core())
    return AuthResponse.from_core(result)


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={
        201: {"description": "User registered successfully"},
        409: {"description": "Username or email already exists"},
    },
)
async def register(request: RegisterRequest, auth_service: AuthService) -> AuthResponse:
    """Register a new user and log them in."""
    result = await auth_service.register(request.to_core())
    return AuthResponse.from_core(result)


@router.get(
    "/me",
    summary="Get current user",
    responses={
        200: {"description": "Current user information"},
        401: {"description": "Missing, invalid or expired token"},
    },
)
async def get_current_user_info(
    token: BearerToken,
    auth_service: AuthService,
) -> UserResponse:
    """Return the user the bearer token belongs to."""
    user = await auth_service.resolve_by_token(token)
    return UserResponse.from_core(user)
