"""
Parameter parser: raw query-string values to QueryParameters.

This is the boundary where untrusted strings become typed values. Malformed
filters raise InvalidQueryParameterError; malformed paging falls back to the
defaults; unknown sort fields are ignored.
"""

from __future__ import annotations

import math
from typing import Mapping, Optional

from catalog_api.domain.query import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    QueryParameters,
    SortField,
    SortOrder,
)
from catalog_api.errors import InvalidQueryParameterError
from catalog_api.utils.logging import get_logger

log = get_logger(__name__)

_TRUE_VALUES = frozenset({"true", "1", "yes"})
_FALSE_VALUES = frozenset({"false", "0", "no"})


def _text(raw: Mapping[str, str], name: str) -> Optional[str]:
    value = raw.get(name)
    if value is None or not value.strip():
        return None
    return value


def _tri_state(raw: Mapping[str, str], name: str) -> Optional[bool]:
    value = raw.get(name)
    if value is None or not value.strip():
        return None
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise InvalidQueryParameterError(name, value, "expected true or false")


def _price(raw: Mapping[str, str], name: str) -> Optional[float]:
    value = raw.get(name)
    if value is None or not value.strip():
        return None
    try:
        number = float(value)
    except ValueError:
        raise InvalidQueryParameterError(name, value, "expected a number") from None
    if not math.isfinite(number):
        raise InvalidQueryParameterError(name, value, "expected a finite number")
    if number < 0:
        raise InvalidQueryParameterError(name, value, "must not be negative")
    return number


def _positive_int(raw: Mapping[str, str], name: str, default: int) -> int:
    value = raw.get(name)
    if value is None:
        return default
    try:
        number = int(value.strip())
    except ValueError:
        return default
    return max(number, 1)


def _sort_field(raw: Mapping[str, str]) -> Optional[SortField]:
    value = _text(raw, "sortBy")
    if value is None:
        return None
    field = SortField.lookup(value.strip())
    if field is None:
        log.info("Ignoring unknown sort field", extra={"sort_by": value})
    return field


def parse_query_parameters(
    raw: Mapping[str, str], max_limit: Optional[int] = None
) -> QueryParameters:
    """
    Build QueryParameters from raw query-string values.

    Parameters
    ----------
    raw : Mapping[str, str]
        Query-string values keyed by their wire names (`minPrice`, `sortBy`, ...).
    max_limit : int | None
        Optional cap on `limit`, applied after clamping to at least 1.

    Raises
    ------
    InvalidQueryParameterError
        If `inStock`, `minPrice` or `maxPrice` cannot be parsed.
    """
    limit = _positive_int(raw, "limit", DEFAULT_LIMIT)
    if max_limit is not None:
        limit = min(limit, max(max_limit, 1))

    return QueryParameters(
        search=_text(raw, "search"),
        category=_text(raw, "category"),
        in_stock=_tri_state(raw, "inStock"),
        min_price=_price(raw, "minPrice"),
        max_price=_price(raw, "maxPrice"),
        sort_by=_sort_field(raw),
        sort_order=SortOrder.parse(raw.get("sortOrder")),
        page=_positive_int(raw, "page", DEFAULT_PAGE),
        limit=limit,
    )


__all__ = ["parse_query_parameters"]
