"""Tag API endpoints."""

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session, selectinload, undefer

from src.api.dependencies import get_current_user, get_page_params, get_path_id
from src.config import get_settings
from src.database import get_db
from src.models.post import Post
from src.models.tag import Tag
from src.models.user import User
from src.schemas.common import ListFilters, Page, SortOrder
from src.schemas.tag import TagCreate, TagDetail, TagListItem, TagResponse, TagUpdate
from src.services.catalog import DuplicateNameError, create_named, rename
from src.services.listing import PageParams, fetch_page

router = APIRouter(prefix=f"{get_settings().api_prefix}/tags", tags=["tags"])

TagSortField = Literal["name", "createdAt", "updatedAt"]

SORT_COLUMNS = {
    "name": Tag.name,
    "createdAt": Tag.created_at,
    "updatedAt": Tag.updated_at,
}


@router.post("", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
def create_tag(
    tag_data: TagCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Create a new tag."""
    try:
        return create_named(db, Tag, tag_data.name)
    except DuplicateNameError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Tag already exists"
        ) from e


@router.get("", response_model=Page[TagListItem, ListFilters])
def list_tags(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    page_params: Annotated[PageParams, Depends(get_page_params)],
    search: Annotated[str | None, Query(description="Match tag names")] = None,
    sort_by: Annotated[TagSortField, Query(alias="sortBy")] = "createdAt",
    sort_order: Annotated[SortOrder, Query(alias="sortOrder")] = "desc",
):
    """List tags with search, pagination and sorting."""
    query = db.query(Tag)
    if search:
        query = query.filter(Tag.name.icontains(search, autoescape=True))

    tags, pagination = fetch_page(
        query,
        page_params,
        SORT_COLUMNS[sort_by],
        sort_order,
        tiebreaker=Tag.id,
        options=[undefer(Tag.post_count)],
    )

    return Page[TagListItem, ListFilters](
        items=[TagListItem.model_validate(t) for t in tags],
        pagination=pagination,
        filters=ListFilters(search=search or None, sort_by=sort_by, sort_order=sort_order),
    )


@router.get("/{id}", response_model=TagDetail)
def read_tag(
    current_user: Annotated[User, Depends(get_current_user)],
    tag_id: Annotated[int, Depends(get_path_id)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get a single tag with the posts it is attached to."""
    tag = (
        db.query(Tag)
        .options(selectinload(Tag.posts).selectinload(Post.author), undefer(Tag.post_count))
        .filter(Tag.id == tag_id)
        .first()
    )
    if not tag:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tag not found")
    return tag


@router.put("/{id}", response_model=TagResponse)
def update_tag(
    current_user: Annotated[User, Depends(get_current_user)],
    tag_id: Annotated[int, Depends(get_path_id)],
    tag_data: TagUpdate,
    db: Annotated[Session, Depends(get_db)],
):
    """Rename a tag."""
    tag = db.query(Tag).filter(Tag.id == tag_id).first()
    if not tag:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tag not found")

    try:
        return rename(db, tag, tag_data.name)
    except DuplicateNameError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Tag name already exists"
        ) from e
