"""Post model."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Text, func, select
from sqlalchemy.orm import column_property, relationship

from src.database import Base
from src.models.category import Category
from src.models.mixins import TimestampMixin
from src.models.tag import post_tags


class Post(Base, TimestampMixin):
    """Blog post written by a user within a category."""

    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(500), nullable=False)
    content = Column(Text, nullable=False)
    published = Column(Boolean, default=False, nullable=False, index=True)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)

    # Relationships
    author = relationship("User", back_populates="posts")
    category = relationship("Category", back_populates="posts")
    tags = relationship("Tag", secondary=post_tags, back_populates="posts", order_by="Tag.name")


# Counted in SQL; load with undefer(Category.post_count)
Category.post_count = column_property(
    select(func.count(Post.id))
    .where(Post.category_id == Category.id)
    .correlate_except(Post)
    .scalar_subquery(),
    deferred=True,
)
