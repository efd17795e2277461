"""Category schemas."""

from datetime import datetime

from src.schemas.common import CamelModel, Name, ORMModel
from src.schemas.post import PostWithAuthor


class CategoryCreate(CamelModel):
    """Create a new category."""

    name: Name


class CategoryUpdate(CamelModel):
    """Rename a category."""

    name: Name


class CategoryResponse(ORMModel):
    """Category response."""

    id: int
    name: str
    created_at: datetime
    updated_at: datetime


class CategoryListItem(CategoryResponse):
    """Category row in list responses."""

    post_count: int = 0


class CategoryDetail(CategoryListItem):
    """Category with its posts."""

    posts: list[PostWithAuthor] = []
