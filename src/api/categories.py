"""Category API endpoints."""

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session, selectinload, undefer

from src.api.dependencies import get_current_user, get_page_params, get_path_id
from src.config import get_settings
from src.database import get_db
from src.models.category import Category
from src.models.post import Post
from src.models.user import User
from src.schemas.category import (
    CategoryCreate,
    CategoryDetail,
    CategoryListItem,
    CategoryResponse,
    CategoryUpdate,
)
from src.schemas.common import ListFilters, Page, SortOrder
from src.services.catalog import DuplicateNameError, create_named, rename
from src.services.listing import PageParams, fetch_page

router = APIRouter(prefix=f"{get_settings().api_prefix}/categories", tags=["categories"])

CategorySortField = Literal["name", "createdAt", "updatedAt"]

SORT_COLUMNS = {
    "name": Category.name,
    "createdAt": Category.created_at,
    "updatedAt": Category.updated_at,
}


def get_category(db: Session, category_id: int) -> Category:
    """Get a category with its posts and their authors."""
    category = (
        db.query(Category)
        .options(
            selectinload(Category.posts).selectinload(Post.author),
            undefer(Category.post_count),
        )
        .filter(Category.id == category_id)
        .first()
    )
    if not category:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    return category


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    category_data: CategoryCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Create a new category."""
    try:
        return create_named(db, Category, category_data.name)
    except DuplicateNameError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Category already exists"
        ) from e


@router.get("", response_model=Page[CategoryListItem, ListFilters])
def list_categories(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    page_params: Annotated[PageParams, Depends(get_page_params)],
    search: Annotated[str | None, Query(description="Match category names")] = None,
    sort_by: Annotated[CategorySortField, Query(alias="sortBy")] = "createdAt",
    sort_order: Annotated[SortOrder, Query(alias="sortOrder")] = "desc",
):
    """List categories with search, pagination and sorting."""
    query = db.query(Category)
    if search:
        query = query.filter(Category.name.icontains(search, autoescape=True))

    categories, pagination = fetch_page(
        query,
        page_params,
        SORT_COLUMNS[sort_by],
        sort_order,
        tiebreaker=Category.id,
        options=[undefer(Category.post_count)],
    )

    return Page[CategoryListItem, ListFilters](
        items=[CategoryListItem.model_validate(c) for c in categories],
        pagination=pagination,
        filters=ListFilters(search=search or None, sort_by=sort_by, sort_order=sort_order),
    )


@router.get("/{id}", response_model=CategoryDetail)
def read_category(
    current_user: Annotated[User, Depends(get_current_user)],
    category_id: Annotated[int, Depends(get_path_id)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get a single category with its posts."""
    return get_category(db, category_id)


@router.put("/{id}", response_model=CategoryResponse)
def update_category(
    current_user: Annotated[User, Depends(get_current_user)],
    category_id: Annotated[int, Depends(get_path_id)],
    category_data: CategoryUpdate,
    db: Annotated[Session, Depends(get_db)],
):
    """Rename a category."""
    category = db.query(Category).filter(Category.id == category_id).first()
    if not category:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")

    try:
        return rename(db, category, category_data.name)
    except DuplicateNameError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Category name already exists"
        ) from e
