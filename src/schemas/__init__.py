"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import AuthResponse, MeResponse, UserLogin, UserRegister, UserResponse
from src.schemas.category import CategoryCreate, CategoryDetail, CategoryResponse, CategoryUpdate
from src.schemas.common import ListFilters, Page, Pagination
from src.schemas.post import PostCreate, PostListFilters, PostResponse
from src.schemas.tag import TagCreate, TagDetail, TagResponse, TagUpdate

__all__ = [
    "UserRegister",
    "UserLogin",
    "UserResponse",
    "AuthResponse",
    "MeResponse",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "CategoryDetail",
    "TagCreate",
    "TagUpdate",
    "TagResponse",
    "TagDetail",
    "PostCreate",
    "PostResponse",
    "PostListFilters",
    "ListFilters",
    "Page",
    "Pagination",
]
