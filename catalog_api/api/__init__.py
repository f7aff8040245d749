"""
HTTP surface for the Product Catalog API.

Translates requests into store operations and query-pipeline calls, and maps
catalog errors to JSON responses.
"""

from catalog_api.api.app import create_app

__all__ = ["create_app"]
