"""
Predicate builder: turns QueryParameters into filters over products.

Each supplied filter becomes one pure predicate; a product survives when every
predicate accepts it. Absent filters contribute no predicate at all, which is
how "no constraint" is expressed.
"""

from __future__ import annotations

from typing import Callable, Iterable, List

from catalog_api.domain.models import Product
from catalog_api.domain.query import QueryParameters

Predicate = Callable[[Product], bool]


def search_predicate(term: str) -> Predicate:
    """Case-insensitive substring match on name, description or category."""
    needle = term.lower()

    def predicate(product: Product) -> bool:
        return (
            needle in product.name.lower()
            or needle in product.description.lower()
            or needle in product.category.lower()
        )

    return predicate


def category_predicate(category: str) -> Predicate:
    """Case-insensitive exact match on category."""
    wanted = category.lower()

    def predicate(product: Product) -> bool:
        return product.category.lower() == wanted

    return predicate


def stock_predicate(in_stock: bool) -> Predicate:
    def predicate(product: Product) -> bool:
        return product.in_stock is in_stock

    return predicate


def min_price_predicate(min_price: float) -> Predicate:
    def predicate(product: Product) -> bool:
        return product.price >= min_price

    return predicate


def max_price_predicate(max_price: float) -> Predicate:
    def predicate(product: Product) -> bool:
        return product.price <= max_price

    return predicate


def build_predicates(params: QueryParameters) -> List[Predicate]:
    """
    Build the predicates for every filter present in `params`.

    Returns an empty list when no filter is supplied.
    """
    predicates: List[Predicate] = []
    if params.search:
        predicates.append(search_predicate(params.search))
    if params.category:
        predicates.append(category_predicate(params.category))
    if params.in_stock is not None:
        predicates.append(stock_predicate(params.in_stock))
    if params.min_price is not None:
        predicates.append(min_price_predicate(params.min_price))
    if params.max_price is not None:
        predicates.append(max_price_predicate(params.max_price))
    return predicates


def matches(params: QueryParameters, product: Product) -> bool:
    """True iff `product` passes all filters supplied in `params`."""
    return all(predicate(product) for predicate in build_predicates(params))


def filter_records(records: Iterable[Product], params: QueryParameters) -> List[Product]:
    """Apply all filters to `records`, preserving their order."""
    predicates = build_predicates(params)
    return [
        product for product in records if all(predicate(product) for predicate in predicates)
    ]


__all__ = [
    "Predicate",
    "build_predicates",
    "category_predicate",
    "filter_records",
    "matches",
    "max_price_predicate",
    "min_price_predicate",
    "search_predicate",
    "stock_predicate",
]
