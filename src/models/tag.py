"""Tag model and its association with posts."""

from sqlalchemy import Column, ForeignKey, Integer, String, Table, func, select
from sqlalchemy.orm import column_property, relationship

from src.database import Base
from src.models.mixins import TimestampMixin

post_tags = Table(
    "post_tags",
    Base.metadata,
    Column("post_id", Integer, ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)


class Tag(Base, TimestampMixin):
    """Tag model. Assignment to posts is managed outside the API."""

    __tablename__ = "tags"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False, index=True)

    # Relationships
    posts = relationship("Post", secondary=post_tags, back_populates="tags", order_by="Post.id")

    # Counted in SQL; load with undefer(Tag.post_count)
    post_count = column_property(
        select(func.count(post_tags.c.post_id))
        .where(post_tags.c.tag_id == id)
        .correlate_except(post_tags)
        .scalar_subquery(),
        deferred=True,
    )
