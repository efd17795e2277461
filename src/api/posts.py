"""Post API endpoints."""

import logging
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload, selectinload

from src.api.dependencies import get_current_user, get_page_params, get_path_id
from src.config import get_settings
from src.database import MAX_ID, get_db
from src.models.category import Category
from src.models.post import Post
from src.models.user import User
from src.schemas.common import Page, SortOrder
from src.schemas.post import PostCreate, PostListFilters, PostResponse
from src.services.listing import PageParams, fetch_page

logger = logging.getLogger(__name__)

router = APIRouter(prefix=f"{get_settings().api_prefix}/posts", tags=["posts"])

PostSortField = Literal["createdAt", "updatedAt", "title"]

SORT_COLUMNS = {
    "createdAt": Post.created_at,
    "updatedAt": Post.updated_at,
    "title": Post.title,
}

# Everything a post response shows besides its own columns
POST_RELATIONS = (
    joinedload(Post.author),
    joinedload(Post.category),
    selectinload(Post.tags),
)


def parse_published(value: str | None) -> bool | None:
    """Interpret the published filter: "true", "false", or no filter at all."""
    if value == "true":
        return True
    if value == "false":
        return False
    return None


def get_post(db: Session, post_id: int) -> Post:
    """Get a post with its author, category and tags."""
    post = db.query(Post).options(*POST_RELATIONS).filter(Post.id == post_id).first()
    if not post:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return post


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    post_data: PostCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Create a new post authored by the current user."""
    category_missing = HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST, detail="Category not found"
    )

    category = db.query(Category).filter(Category.id == post_data.category_id).first()
    if not category:
        raise category_missing

    post = Post(
        title=post_data.title,
        content=post_data.content,
        published=post_data.published,
        category_id=category.id,
        author_id=current_user.id,
    )
    db.add(post)
    try:
        db.commit()
    except IntegrityError as e:
        # Category removed between the check and the insert
        db.rollback()
        logger.warning(f"Post insert rejected for category {post_data.category_id}")
        raise category_missing from e

    return PostResponse.model_validate(get_post(db, post.id))


@router.get("", response_model=Page[PostResponse, PostListFilters])
def list_posts(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    page_params: Annotated[PageParams, Depends(get_page_params)],
    search: Annotated[str | None, Query(description="Match post titles or content")] = None,
    category: Annotated[
        int | None, Query(ge=1, le=MAX_ID, description="Only posts in this category")
    ] = None,
    published: Annotated[
        str | None, Query(description='"true" or "false"; anything else disables the filter')
    ] = None,
    sort_by: Annotated[PostSortField, Query(alias="sortBy")] = "createdAt",
    sort_order: Annotated[SortOrder, Query(alias="sortOrder")] = "desc",
):
    """List posts with search, filters, pagination and sorting."""
    published_filter = parse_published(published)

    query = db.query(Post)
    if search:
        query = query.filter(
            or_(
                Post.title.icontains(search, autoescape=True),
                Post.content.icontains(search, autoescape=True),
            )
        )
    if category is not None:
        query = query.filter(Post.category_id == category)
    if published_filter is not None:
        query = query.filter(Post.published.is_(published_filter))

    posts, pagination = fetch_page(
        query,
        page_params,
        SORT_COLUMNS[sort_by],
        sort_order,
        tiebreaker=Post.id,
        options=POST_RELATIONS,
    )

    return Page[PostResponse, PostListFilters](
        items=[PostResponse.model_validate(p) for p in posts],
        pagination=pagination,
        filters=PostListFilters(
            search=search or None,
            category=category,
            published=published_filter,
            sort_by=sort_by,
            sort_order=sort_order,
        ),
    )


@router.get("/{id}", response_model=PostResponse)
def read_post(
    current_user: Annotated[User, Depends(get_current_user)],
    post_id: Annotated[int, Depends(get_path_id)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get a single post."""
    return PostResponse.model_validate(get_post(db, post_id))
