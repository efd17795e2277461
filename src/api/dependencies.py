"""FastAPI dependencies for authentication, path ids and pagination."""

import logging
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Path, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.database import MAX_ID, get_db
from src.models.user import User
from src.services.auth import TokenError, decode_access_token, get_user_by_id
from src.services.listing import PageParams

logger = logging.getLogger(__name__)


def _unauthorized(reason: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=reason,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    db: Annotated[Session, Depends(get_db)],
    authorization: Annotated[str | None, Header()] = None,
) -> User:
    """Get the current authenticated user from the bearer token."""
    if not authorization:
        raise _unauthorized("Authorization header missing")

    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise _unauthorized("Authorization header missing or invalid")

    try:
        user_id = decode_access_token(token)
    except TokenError as e:
        logger.warning(f"Rejected bearer token: {e}")
        raise _unauthorized(str(e)) from e

    try:
        user = get_user_by_id(db, user_id)
    except SQLAlchemyError as e:
        logger.exception("User lookup failed during authentication")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        ) from e

    if user is None:
        raise _unauthorized("User not found")

    return user


def get_path_id(id: Annotated[str, Path()]) -> int:  # noqa: A002
    """Parse the id path segment into a positive integer that fits an id column."""
    # Length check first: int() refuses very long digit strings
    if not (id.isascii() and id.isdigit()) or len(id) > len(str(MAX_ID)):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid id")
    if not 0 < int(id) <= MAX_ID:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid id")
    return int(id)


def get_page_params(
    page: Annotated[int, Query(ge=1, description="Page number, starting at 1")] = 1,
    limit: Annotated[int, Query(ge=1, le=100, description="Items per page")] = 10,
) -> PageParams:
    """Validated page and limit query parameters."""
    return PageParams(page=page, limit=limit)

