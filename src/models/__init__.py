"""SQLAlchemy models."""

from src.models.category import Category
from src.models.post import Post
from src.models.tag import Tag, post_tags
from src.models.user import User

__all__ = [
    "User",
    "Category",
    "Tag",
    "Post",
    "post_tags",
]
