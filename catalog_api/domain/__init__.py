"""
Domain package for the Product Catalog API.

Exports the product record, the mutation payloads and the query contracts.
Keep this package focused on data definitions and validation concerns.
"""

from catalog_api.domain.models import Product, ProductCreate, ProductUpdate
from catalog_api.domain.query import (
    EchoedFilters,
    Pagination,
    QueryParameters,
    QueryResult,
    SortField,
    SortOrder,
)

__all__ = [
    "EchoedFilters",
    "Pagination",
    "Product",
    "ProductCreate",
    "ProductUpdate",
    "QueryParameters",
    "QueryResult",
    "SortField",
    "SortOrder",
]
