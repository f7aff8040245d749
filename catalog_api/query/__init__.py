"""
Query engine for the Product Catalog API.

This module re-exports the pipeline and its stages so downstream code can
import from `catalog_api.query` directly.
"""

from catalog_api.query.comparators import build_comparator, sort_records
from catalog_api.query.paginator import Page, paginate
from catalog_api.query.params import parse_query_parameters
from catalog_api.query.pipeline import QueryPipeline, execute
from catalog_api.query.predicates import build_predicates, filter_records, matches

__all__ = [
    # Stages
    "build_comparator",
    "build_predicates",
    "filter_records",
    "matches",
    "paginate",
    "Page",
    "sort_records",
    # Boundary
    "parse_query_parameters",
    # Pipeline
    "QueryPipeline",
    "execute",
]
