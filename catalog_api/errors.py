"""
Exception hierarchy for the Product Catalog API.

The query engine itself raises none of these; they come from the collaborators
around it (parameter parsing, the store, seed loading) and are mapped to HTTP
responses by `catalog_api.api.handlers` and to exit codes by the CLI.
"""

from __future__ import annotations

from typing import Any


class CatalogError(Exception):
    """Base class for all catalog errors."""


class ProductNotFoundError(CatalogError, LookupError):
    """Raised when a product id does not exist in the store."""

    def __init__(self, product_id: int) -> None:
        self.product_id = product_id
        super().__init__(f"Product with ID {product_id} does not exist")


class InvalidQueryParameterError(CatalogError, ValueError):
    """Raised when a raw query-string value cannot be parsed."""

    def __init__(self, name: str, value: Any, reason: str) -> None:
        self.name = name
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid value {value!r} for '{name}': {reason}")


class SeedDataError(CatalogError):
    """Raised when a seed file cannot be read or validated."""


class ApiError(CatalogError):
    """An error that maps directly to an HTTP status and JSON body."""

    def __init__(self, status_code: int, error: str, message: str) -> None:
        self.status_code = status_code
        self.error = error
        self.message = message
        super().__init__(message)


__all__ = [
    "ApiError",
    "CatalogError",
    "InvalidQueryParameterError",
    "ProductNotFoundError",
    "SeedDataError",
]
