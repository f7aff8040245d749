"""
Query contracts for the Product Catalog API.

`QueryParameters` is the fully parsed input of one query and `QueryResult` its
output envelope. Both are frozen value objects built fresh per query. Absent
filters are `None`, never sentinel values.
"""
from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from catalog_api.domain.models import Product

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

_VALUE_OBJECT_CONFIG = {
    "frozen": True,
    "populate_by_name": True,
    "alias_generator": to_camel,
}


class SortField(str, Enum):
    """Fields a query may sort on, by wire name."""

    ID = "id"
    NAME = "name"
    DESCRIPTION = "description"
    PRICE = "price"
    CATEGORY = "category"
    IN_STOCK = "inStock"
    STOCK_QUANTITY = "stockQuantity"
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"

    @classmethod
    def lookup(cls, name: str) -> Optional["SortField"]:
        """Resolve a wire (camelCase) or attribute (snake_case) name; None if unknown."""
        for field in cls:
            if name == field.value or name == field.name.lower():
                return field
        return None


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: Optional[str]) -> "SortOrder":
        """`desc` in any case is descending; everything else is ascending."""
        if isinstance(value, str) and value.strip().lower() == cls.DESC.value:
            return cls.DESC
        return cls.ASC


class QueryParameters(BaseModel):
    """
    Parsed, immutable input bundle for one query.

    Blank `search` and `category` are absent. `page` and `limit` below 1 are
    normalized to 1. `min_price > max_price` is allowed and simply matches
    nothing.
    """

    search: Optional[str] = None
    category: Optional[str] = None
    in_stock: Optional[bool] = None
    min_price: Optional[float] = Field(None, ge=0)
    max_price: Optional[float] = Field(None, ge=0)
    sort_by: Optional[SortField] = None
    sort_order: SortOrder = SortOrder.ASC
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    model_config = _VALUE_OBJECT_CONFIG

    @field_validator("search", "category")
    @classmethod
    def _blank_is_absent(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value

    @field_validator("page", "limit")
    @classmethod
    def _at_least_one(cls, value: int) -> int:
        return max(value, 1)

    @field_validator("sort_order", mode="before")
    @classmethod
    def _coerce_sort_order(cls, value: object) -> SortOrder:
        if isinstance(value, SortOrder):
            return value
        return SortOrder.parse(value if isinstance(value, str) else None)


class Pagination(BaseModel):
    current_page: int
    total_pages: int
    total_records: int = Field(..., alias="totalProducts")
    has_next: bool
    has_prev: bool

    model_config = _VALUE_OBJECT_CONFIG


class EchoedFilters(BaseModel):
    """The filters a caller supplied; absent ones stay `None`."""

    search: Optional[str] = None
    category: Optional[str] = None
    in_stock: Optional[bool] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    sort_by: Optional[SortField] = None
    sort_order: SortOrder = SortOrder.ASC

    model_config = _VALUE_OBJECT_CONFIG

    @classmethod
    def from_params(cls, params: QueryParameters) -> "EchoedFilters":
        return cls(
            search=params.search,
            category=params.category,
            in_stock=params.in_stock,
            min_price=params.min_price,
            max_price=params.max_price,
            sort_by=params.sort_by,
            sort_order=params.sort_order,
        )


class QueryResult(BaseModel):
    data: List[Product] = Field(default_factory=list)
    pagination: Pagination
    echoed_filters: EchoedFilters = Field(..., alias="filters")

    model_config = _VALUE_OBJECT_CONFIG


__all__ = [
    "DEFAULT_LIMIT",
    "DEFAULT_PAGE",
    "EchoedFilters",
    "Pagination",
    "QueryParameters",
    "QueryResult",
    "SortField",
    "SortOrder",
]
