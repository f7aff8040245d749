"""
In-memory product store.

Keeps products in insertion order behind a re-entrant lock. `snapshot()`
copies the collection under the lock, so a query always reads a consistent
point-in-time view even while writers are active.
"""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, Optional, Tuple

from catalog_api.config import Settings, get_settings
from catalog_api.domain.models import Product, ProductCreate, ProductUpdate
from catalog_api.errors import ProductNotFoundError
from catalog_api.store.abstract import AbstractProductStore
from catalog_api.store.seed import initial_products
from catalog_api.utils.logging import get_logger

log = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryProductStore(AbstractProductStore):
    """
    Thread-safe store backed by an insertion-ordered dict.

    Ids are assigned monotonically after the highest seeded id and are never
    reused, even after deletion.
    """

    def __init__(
        self,
        products: Iterable[Product] = (),
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._lock = threading.RLock()
        self._clock = clock
        self._products: Dict[int, Product] = {}
        for product in products:
            if product.id in self._products:
                raise ValueError(f"Duplicate product id {product.id}")
            self._products[product.id] = product
        self._next_id = max(self._products, default=0) + 1

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "InMemoryProductStore":
        settings = settings or get_settings()
        store = cls(initial_products(settings))
        log.info("Product store seeded", extra={"products": len(store)})
        return store

    def snapshot(self) -> Tuple[Product, ...]:
        with self._lock:
            return tuple(self._products.values())

    def get(self, product_id: int) -> Product:
        with self._lock:
            try:
                return self._products[product_id]
            except KeyError:
                raise ProductNotFoundError(product_id) from None

    def create(self, payload: ProductCreate) -> Product:
        with self._lock:
            now = self._clock()
            product = Product(
                id=self._next_id,
                name=payload.name,
                description=payload.description or "",
                price=payload.price,
                category=payload.category,
                in_stock=payload.in_stock,
                stock_quantity=payload.stock_quantity,
                created_at=now,
                updated_at=now,
            )
            self._products[product.id] = product
            self._next_id += 1
        log.info("Product created", extra={"product_id": product.id})
        return product

    def update(self, product_id: int, payload: ProductUpdate) -> Product:
        with self._lock:
            current = self.get(product_id)
            fields = current.model_dump()
            fields.update(
                name=payload.name,
                price=payload.price,
                category=payload.category,
                updated_at=max(self._clock(), current.created_at),
            )
            if payload.description:
                fields["description"] = payload.description
            if payload.in_stock is not None:
                fields["in_stock"] = payload.in_stock
            if payload.stock_quantity is not None:
                fields["stock_quantity"] = payload.stock_quantity
            updated = Product.model_validate(fields)
            # Reassigning an existing key keeps its insertion position.
            self._products[product_id] = updated
        log.info("Product updated", extra={"product_id": product_id})
        return updated

    def delete(self, product_id: int) -> Product:
        with self._lock:
            try:
                product = self._products.pop(product_id)
            except KeyError:
                raise ProductNotFoundError(product_id) from None
        log.info("Product deleted", extra={"product_id": product_id})
        return product

    def __len__(self) -> int:
        with self._lock:
            return len(self._products)


__all__ = ["InMemoryProductStore"]
