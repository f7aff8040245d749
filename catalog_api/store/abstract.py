"""
Store interfaces for the Product Catalog API.

The query pipeline only needs `snapshot()`; the HTTP layer also needs
single-record lookup and mutations. Concrete stores implement the
ProductStore protocol (or subclass AbstractProductStore) so the engine stays
decoupled from any storage or concurrency strategy.
"""

from __future__ import annotations

import abc
from typing import Protocol, Sequence, runtime_checkable

from catalog_api.domain.models import Product, ProductCreate, ProductUpdate


@runtime_checkable
class SnapshotSource(Protocol):
    """Anything that can hand out a stable, point-in-time list of products."""

    def snapshot(self) -> Sequence[Product]:
        """
        Return the current products in insertion order.

        The returned sequence must not change while a query reads it.
        """
        ...


@runtime_checkable
class ProductStore(SnapshotSource, Protocol):
    """
    Full store contract used by the HTTP layer.

    `get`, `update` and `delete` raise ProductNotFoundError for unknown ids.
    """

    def get(self, product_id: int) -> Product:
        ...

    def create(self, payload: ProductCreate) -> Product:
        ...

    def update(self, product_id: int, payload: ProductUpdate) -> Product:
        ...

    def delete(self, product_id: int) -> Product:
        ...

    def __len__(self) -> int:
        ...


class AbstractProductStore(abc.ABC):
    """
    Optional ABC helper for class-based implementations.
    """

    @abc.abstractmethod
    def snapshot(self) -> Sequence[Product]:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    def get(self, product_id: int) -> Product:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    def create(self, payload: ProductCreate) -> Product:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    def update(self, product_id: int, payload: ProductUpdate) -> Product:  # pragma: no cover
        raise NotImplementedError

    @abc.abstractmethod
    def delete(self, product_id: int) -> Product:  # pragma: no cover - interface only
        raise NotImplementedError

    def __len__(self) -> int:
        return len(self.snapshot())


__all__ = ["AbstractProductStore", "ProductStore", "SnapshotSource"]
