"""Authentication schemas for request/response models."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from auth_core import AuthResponse as CoreAuthResponse
from auth_core import LoginRequest as CoreLoginRequest
from auth_core import PublicUser
from auth_core import RegisterRequest as CoreRegisterRequest
from auth_core.services.password_service import MAX_PASSWORD_BYTES


def _check_password_bytes(value: str) -> str:
    # max_length counts characters; bcrypt's limit is on the UTF-8 encoding
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return value


class RegisterRequest(BaseModel):
    """Request schema for user registration."""

    username: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Unique username (1-100 characters)",
    )
    email: EmailStr = Field(..., max_length=255, description="User's email address")
    password: str = Field(
        ...,
        min_length=1,
        max_length=72,
        description="Password (bcrypt accepts at most 72 bytes)",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "alice",
                "email": "alice@example.com",
                "password": "password123",
            },
        },
    )

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        return _check_password_bytes(v)

    def to_core(self) -> CoreRegisterRequest:
        return CoreRegisterRequest(
            username=self.username,
            email=str(self.email),
            password=self.password,
        )


class LoginRequest(BaseModel):
    """Request schema for user login."""

    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1, max_length=72)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "alice",
                "password": "password123",
            },
        },
    )

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        return _check_password_bytes(v)

    def to_core(self) -> CoreLoginRequest:
        return CoreLoginRequest(username=self.username, password=self.password)


class UserResponse(BaseModel):
    """Public view of a user. Never carries the password hash."""

    id: str = Field(..., description="User identifier")
    username: str
    email: str

    @classmethod
    def from_core(cls, user: PublicUser) -> "UserResponse":
        return cls(id=str(user.id), username=user.username, email=user.email)


class AuthResponse(BaseModel):
    """Response schema for successful login or registration."""

    token: str = Field(..., description="Opaque bearer token")
    user: UserResponse

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "token": "3q2-7wKXh1y4F0r9QbZ0YgP8xM2dL5vN6sT1uA0eB9c",
                "user": {
                    "id": "1",
                    "username": "alice",
                    "email": "alice@example.com",
                },
            },
        },
    )

    @classmethod
    def from_core(cls, response: CoreAuthResponse) -> "AuthResponse":
        return cls(token=response.token, user=UserResponse.from_core(response.user))
