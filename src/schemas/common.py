"""Shared schemas: camelCase base model, pagination and list filters."""

from typing import Annotated, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, StringConstraints
from pydantic.alias_generators import to_camel

ItemT = TypeVar("ItemT")
FiltersT = TypeVar("FiltersT")

SortOrder = Literal["asc", "desc"]

# Unique display name shared by categories and tags
Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase JSON keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ORMModel(CamelModel):
    """Response model built from ORM rows."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class Pagination(CamelModel):
    """Pagination metadata for list responses."""

    current_page: int
    total_pages: int
    total_count: int
    limit: int
    has_next: bool
    has_prev: bool


class ListFilters(CamelModel):
    """Filters echoed back by category and tag list endpoints."""

    search: str | None = None
    sort_by: str
    sort_order: SortOrder


class Page(CamelModel, Generic[ItemT, FiltersT]):
    """A page of items with pagination metadata and the applied filters."""

    items: list[ItemT]
    pagination: Pagination
    filters: FiltersT
