"""
Product Catalog API - product records over HTTP with a deterministic query engine.

This package provides:

- A query engine (filter, sort, paginate) over point-in-time product snapshots
- A store abstraction with a thread-safe in-memory implementation
- A FastAPI application with API-key auth and admin-only mutations
- A typer CLI to inspect settings, serve the API and run ad-hoc queries

The engine is pure and synchronous: it never mutates the records it reads and
keeps no state between calls.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from catalog_api.config import Settings, get_settings
from catalog_api.domain import (
    Product,
    ProductCreate,
    ProductUpdate,
    QueryParameters,
    QueryResult,
    SortField,
    SortOrder,
)
from catalog_api.query import QueryPipeline, execute, parse_query_parameters
from catalog_api.store import InMemoryProductStore, ProductStore
from catalog_api.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "Product",
    "ProductCreate",
    "ProductUpdate",
    "QueryParameters",
    "QueryResult",
    "SortField",
    "SortOrder",
    # Query engine
    "QueryPipeline",
    "execute",
    "parse_query_parameters",
    # Store
    "InMemoryProductStore",
    "ProductStore",
    # Logging
    "configure_logging",
    "get_logger",
]
