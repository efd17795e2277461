"""Authentication schemas."""

from datetime import datetime

from pydantic import EmailStr, Field

from src.schemas.common import CamelModel, ORMModel


class UserRegister(CamelModel):
    """User registration request."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=6, max_length=128)


class UserLogin(CamelModel):
    """User login request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class UserSummary(ORMModel):
    """Author information embedded in posts."""

    id: int
    name: str
    email: str


class UserResponse(UserSummary):
    """User information response. The password hash is never included."""

    created_at: datetime
    updated_at: datetime


class AuthResponse(CamelModel):
    """Authentication response with token and user info."""

    user: UserResponse
    token: str
    token_type: str = "bearer"  # noqa: S105


class MeResponse(CamelModel):
    """Current user response."""

    user: UserResponse
