"""
Seed data for the in-memory product store.

Provides the five sample products the service starts with by default, and a
loader for JSON seed files (a list of product objects with camelCase keys, as
written by `scripts/generate_products.py`).
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Tuple

from pydantic import ValidationError

from catalog_api.config import Settings
from catalog_api.domain.models import Product
from catalog_api.errors import SeedDataError


def _day(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


SAMPLE_PRODUCTS: Tuple[Product, ...] = (
    Product(
        id=1,
        name="Wireless Bluetooth Headphones",
        description="High-quality wireless headphones with noise cancellation",
        price=99.99,
        category="Electronics",
        in_stock=True,
        stock_quantity=50,
        created_at=_day(2024, 1, 15),
        updated_at=_day(2024, 1, 15),
    ),
    Product(
        id=2,
        name="Smartphone Case",
        description="Durable protective case for smartphones",
        price=19.99,
        category="Accessories",
        in_stock=True,
        stock_quantity=100,
        created_at=_day(2024, 1, 10),
        updated_at=_day(2024, 1, 10),
    ),
    Product(
        id=3,
        name="Laptop Backpack",
        description="Water-resistant backpack with laptop compartment",
        price=49.99,
        category="Accessories",
        in_stock=False,
        stock_quantity=0,
        created_at=_day(2024, 1, 5),
        updated_at=_day(2024, 1, 12),
    ),
    Product(
        id=4,
        name="Mechanical Keyboard",
        description="RGB mechanical keyboard with blue switches",
        price=79.99,
        category="Electronics",
        in_stock=True,
        stock_quantity=25,
        created_at=_day(2024, 1, 20),
        updated_at=_day(2024, 1, 20),
    ),
    Product(
        id=5,
        name="Wireless Mouse",
        description="Ergonomic wireless mouse with long battery life",
        price=29.99,
        category="Electronics",
        in_stock=True,
        stock_quantity=75,
        created_at=_day(2024, 1, 18),
        updated_at=_day(2024, 1, 18),
    ),
)


def load_seed_file(path: Path) -> List[Product]:
    """
    Load and validate products from a JSON seed file.

    Raises SeedDataError when the file is unreadable, is not a JSON array,
    contains an invalid product or repeats an id.
    """
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise SeedDataError(f"Cannot read seed file {path}: {exc}") from exc

    if not isinstance(raw, list):
        raise SeedDataError(f"Seed file {path} must contain a JSON array of products")

    try:
        products = [Product.model_validate(item) for item in raw]
    except ValidationError as exc:
        raise SeedDataError(f"Invalid product in seed file {path}: {exc}") from exc

    seen: set[int] = set()
    for product in products:
        if product.id in seen:
            raise SeedDataError(f"Duplicate product id {product.id} in seed file {path}")
        seen.add(product.id)
    return products


def initial_products(settings: Settings) -> List[Product]:
    """Pick the starting collection: seed file first, then the samples, else nothing."""
    if settings.seed_file is not None:
        return load_seed_file(settings.seed_file)
    if settings.seed_sample_data:
        return list(SAMPLE_PRODUCTS)
    return []


__all__ = ["SAMPLE_PRODUCTS", "initial_products", "load_seed_file"]
