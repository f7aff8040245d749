"""
Query pipeline: filter, then sort, then paginate.

Usage:
    from catalog_api.query.pipeline import execute

    result = execute(store.snapshot(), QueryParameters(search="wireless", limit=5))
    result.pagination.total_records  # matches before pagination

The pipeline is stateless and never mutates the snapshot, so it can run
concurrently from any number of callers.
"""

from __future__ import annotations

import time
from typing import Optional, Sequence

from catalog_api.domain.models import Product
from catalog_api.domain.query import EchoedFilters, QueryParameters, QueryResult
from catalog_api.query.comparators import sort_records
from catalog_api.query.paginator import paginate
from catalog_api.query.predicates import filter_records
from catalog_api.store.abstract import SnapshotSource
from catalog_api.utils.logging import get_logger

log = get_logger(__name__)


def execute(snapshot: Sequence[Product], params: QueryParameters) -> QueryResult:
    """
    Run one query over `snapshot`.

    Pagination metadata is computed over the filtered products, not the whole
    snapshot. Never raises for a valid QueryParameters.
    """
    start = time.perf_counter()
    filtered = filter_records(snapshot, params)
    ordered = sort_records(filtered, params.sort_by, params.sort_order)
    page = paginate(ordered, params.page, params.limit)

    log.debug(
        "Query executed",
        extra={
            "snapshot": len(snapshot),
            "filtered": len(filtered),
            "returned": len(page.items),
            "page": page.page,
            "limit": page.limit,
            "duration_ms": round((time.perf_counter() - start) * 1000, 3),
        },
    )
    return QueryResult(
        data=page.items,
        pagination=page.metadata(),
        echoed_filters=EchoedFilters.from_params(params),
    )


class QueryPipeline:
    """
    Binds the pipeline to a snapshot source so callers only pass parameters.
    """

    def __init__(self, source: Optional[SnapshotSource] = None) -> None:
        self._source = source

    def execute(self, snapshot: Sequence[Product], params: QueryParameters) -> QueryResult:
        return execute(snapshot, params)

    def run(self, params: QueryParameters) -> QueryResult:
        """Execute against a fresh snapshot of the bound source."""
        if self._source is None:
            raise RuntimeError("QueryPipeline.run() requires a snapshot source")
        return execute(self._source.snapshot(), params)


__all__ = ["QueryPipeline", "execute"]
