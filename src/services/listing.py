"""Filtered, sorted and paginated listing shared by every list endpoint."""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from sqlalchemy import asc, desc
from sqlalchemy.orm import Query

from src.schemas.common import Pagination


@dataclass(frozen=True)
class PageParams:
    """Validated page number and page size."""

    page: int = 1
    limit: int = 10

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


def build_pagination(params: PageParams, total_count: int) -> Pagination:
    """Compute pagination metadata for a page of a result set."""
    total_pages = math.ceil(total_count / params.limit)
    return Pagination(
        current_page=params.page,
        total_pages=total_pages,
        total_count=total_count,
        limit=params.limit,
        has_next=params.page < total_pages,
        has_prev=params.page > 1,
    )


def fetch_page(
    query: Query,
    params: PageParams,
    sort_column: Any,
    sort_order: str,
    tiebreaker: Any,
    options: Sequence[Any] = (),
) -> tuple[list[Any], Pagination]:
    """Fetch one page of an already filtered query together with its total count.

    The page and the count run as two separate reads against the same filter,
    so the count may drift from the page under concurrent writes.
    """
    direction = asc if sort_order == "asc" else desc
    items = (
        query.options(*options)
        .order_by(direction(sort_column), direction(tiebreaker))
        .offset(params.skip)
        .limit(params.limit)
        .all()
    )
    total_count = query.order_by(None).count()
    return items, build_pagination(params, total_count)
