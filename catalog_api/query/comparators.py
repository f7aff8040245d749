"""
Comparator builder: turns a sort field and direction into a total order.

Every sortable field maps to a typed accessor. Strings compare
case-insensitively; numbers, booleans (False < True) and timestamps use their
natural ordering. A value that is missing, or not of the field's declared type,
sorts after every present value regardless of direction.
"""

from __future__ import annotations

from datetime import datetime
from functools import cmp_to_key
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union

from catalog_api.domain.models import Product
from catalog_api.domain.query import SortField, SortOrder

Comparator = Callable[[Product, Product], int]

_MISSING = object()

_SORT_ATTRIBUTES: Dict[SortField, Tuple[str, Tuple[type, ...]]] = {
    SortField.ID: ("id", (int,)),
    SortField.NAME: ("name", (str,)),
    SortField.DESCRIPTION: ("description", (str,)),
    SortField.PRICE: ("price", (int, float)),
    SortField.CATEGORY: ("category", (str,)),
    SortField.IN_STOCK: ("in_stock", (bool,)),
    SortField.STOCK_QUANTITY: ("stock_quantity", (int,)),
    SortField.CREATED_AT: ("created_at", (datetime,)),
    SortField.UPDATED_AT: ("updated_at", (datetime,)),
}


def sort_value(product: Any, field: SortField) -> Any:
    """
    Extract the comparable value of `field`, or the missing marker.

    bool is an int subclass, so it only counts as present on the boolean field.
    """
    attribute, types = _SORT_ATTRIBUTES[field]
    value = getattr(product, attribute, None)
    if value is None or not isinstance(value, types):
        return _MISSING
    if isinstance(value, bool) and bool not in types:
        return _MISSING
    if isinstance(value, str):
        return value.lower()
    return value


def _natural(left: Any, right: Any) -> int:
    return (left > right) - (left < right)


def build_comparator(
    field: SortField, order: Union[SortOrder, str, None] = SortOrder.ASC
) -> Comparator:
    """
    Build a three-way comparator for `field`.

    `order` is `desc` for descending; any other value, including None, is
    ascending. Equal keys compare as 0, so a stable sort keeps their input order.
    """
    descending = SortOrder.parse(order) is SortOrder.DESC

    def comparator(left: Product, right: Product) -> int:
        a = sort_value(left, field)
        b = sort_value(right, field)
        a_missing = a is _MISSING
        b_missing = b is _MISSING
        if a_missing or b_missing:
            return int(a_missing) - int(b_missing)
        result = _natural(a, b)
        return -result if descending else result

    return comparator


def sort_records(
    records: Iterable[Product],
    field: Optional[SortField],
    order: Union[SortOrder, str, None] = SortOrder.ASC,
) -> List[Product]:
    """Stable-sort `records` by `field`; returns them unchanged (as a list) when field is None."""
    if field is None:
        return list(records)
    return sorted(records, key=cmp_to_key(build_comparator(field, order)))


__all__ = ["Comparator", "build_comparator", "sort_records", "sort_value"]
