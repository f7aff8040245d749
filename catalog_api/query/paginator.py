"""
Paginator: slices an ordered sequence into one page and describes the rest.

Out-of-range pages are not errors. A page past the end yields an empty slice
with metadata that still reflects the full sequence.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, List, Sequence, TypeVar

from catalog_api.domain.query import Pagination

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of items plus the metadata computed over all `total` items."""

    items: List[T]
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.total else 0

    @property
    def has_next(self) -> bool:
        return self.page * self.limit < self.total

    @property
    def has_prev(self) -> bool:
        return (self.page - 1) * self.limit > 0

    def metadata(self) -> Pagination:
        return Pagination(
            current_page=self.page,
            total_pages=self.total_pages,
            total_records=self.total,
            has_next=self.has_next,
            has_prev=self.has_prev,
        )


def paginate(items: Sequence[T], page: int, limit: int) -> Page[T]:
    """
    Return the slice `[(page-1)*limit, page*limit)` of `items`.

    `page` and `limit` below 1 are treated as 1 so this never raises.
    """
    page = max(page, 1)
    limit = max(limit, 1)
    start = (page - 1) * limit
    return Page(items=list(items[start : start + limit]), page=page, limit=limit, total=len(items))


__all__ = ["Page", "paginate"]
