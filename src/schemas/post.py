"""Post schemas."""

from datetime import datetime

from pydantic import Field, StrictBool, StrictInt

from src.database import MAX_ID
from src.schemas.auth import UserSummary
from src.schemas.common import CamelModel, ListFilters, ORMModel


class PostCreate(CamelModel):
    """Create a new post. The author is always the authenticated user.

    categoryId and published must be real JSON numbers and booleans; strings
    such as "7" or "yes" are rejected rather than coerced.
    """

    title: str = Field(..., min_length=1, max_length=500)
    content: str = Field(..., min_length=1)
    category_id: StrictInt = Field(..., gt=0, le=MAX_ID)
    published: StrictBool = False


class CategorySummary(ORMModel):
    """Category information embedded in posts."""

    id: int
    name: str


class TagSummary(ORMModel):
    """Tag information embedded in posts."""

    id: int
    name: str


class PostBase(ORMModel):
    """Post columns."""

    id: int
    title: str
    content: str
    published: bool
    author_id: int
    category_id: int
    created_at: datetime
    updated_at: datetime


class PostWithAuthor(PostBase):
    """Post with its author, used inside category and tag details."""

    author: UserSummary


class PostResponse(PostWithAuthor):
    """Post with author, category and tags."""

    category: CategorySummary
    tags: list[TagSummary] = []


class PostListFilters(ListFilters):
    """Filters echoed back by the post list endpoint."""

    category: int | None = None
    published: bool | None = None
