"""Tag schemas."""

from datetime import datetime

from src.schemas.common import CamelModel, Name, ORMModel
from src.schemas.post import PostWithAuthor


class TagCreate(CamelModel):
    """Create a new tag."""

    name: Name


class TagUpdate(CamelModel):
    """Rename a tag."""

    name: Name


class TagResponse(ORMModel):
    """Tag response."""

    id: int
    name: str
    created_at: datetime
    updated_at: datetime


class TagListItem(TagResponse):
    """Tag row in list responses."""

    post_count: int = 0


class TagDetail(TagListItem):
    """Tag with the posts it is attached to."""

    posts: list[PostWithAuthor] = []
