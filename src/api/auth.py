"""Authentication API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from src.api.dependencies import get_current_user
from src.config import get_settings
from src.database import get_db
from src.models.user import User
from src.schemas.auth import AuthResponse, MeResponse, UserLogin, UserRegister, UserResponse
from src.services.auth import (
    EmailInUseError,
    authenticate_user,
    create_access_token,
    create_user,
    get_user_by_email,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix=f"{get_settings().api_prefix}/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    db: Annotated[Session, Depends(get_db)],
):
    """Register a new user."""
    email_in_use = HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="Email already in use",
    )

    # Check if user already exists
    if get_user_by_email(db, user_data.email):
        raise email_in_use

    try:
        user = create_user(db, user_data.name, user_data.email, user_data.password)
    except EmailInUseError as e:
        raise email_in_use from e

    return AuthResponse(
        user=UserResponse.model_validate(user),
        token=create_access_token(user.id, user.email),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    db: Annotated[Session, Depends(get_db)],
):
    """Login with email and password."""
    user = authenticate_user(db, credentials.email, credentials.password)

    if not user:
        logger.warning("Failed login attempt")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid credentials",
        )

    return AuthResponse(
        user=UserResponse.model_validate(user),
        token=create_access_token(user.id, user.email),
    )


@router.get("/me", response_model=MeResponse)
def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return MeResponse(user=UserResponse.model_validate(current_user))
