"""
Pytest configuration for the Product Catalog API.

Provides fixtures for:
- Settings with test-specific overrides
- The five sample products and a store seeded with them
- A product factory for ad-hoc records
- A FastAPI TestClient plus the headers the API expects
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Dict, Generator, List

import pytest
from fastapi.testclient import TestClient

from catalog_api.api.app import create_app
from catalog_api.config import Settings
from catalog_api.domain.models import Product
from catalog_api.store.memory import InMemoryProductStore
from catalog_api.store.seed import SAMPLE_PRODUCTS

TEST_API_KEY = "test-api-key"


@pytest.fixture
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.
    """
    return Settings(
        app_env="test",
        log_level="DEBUG",
        api_key=TEST_API_KEY,
        max_page_limit=100,
        seed_sample_data=True,
        seed_file=None,
    )


@pytest.fixture
def sample_products() -> List[Product]:
    """The five sample products, prices [99.99, 19.99, 49.99, 79.99, 29.99]."""
    return list(SAMPLE_PRODUCTS)


@pytest.fixture
def store(sample_products: List[Product]) -> InMemoryProductStore:
    return InMemoryProductStore(sample_products)


@pytest.fixture
def make_product() -> Callable[..., Product]:
    """
    Factory for products with sensible defaults; override any field by name.
    """
    counter = {"next_id": 100}

    def _make(**overrides: Any) -> Product:
        stamp = datetime(2024, 2, 1, tzinfo=timezone.utc)
        fields: Dict[str, Any] = {
            "id": counter["next_id"],
            "name": "Generic Widget",
            "description": "",
            "price": 10.0,
            "category": "Misc",
            "in_stock": True,
            "stock_quantity": 1,
            "created_at": stamp,
            "updated_at": stamp,
        }
        counter["next_id"] += 1
        fields.update(overrides)
        return Product(**fields)

    return _make


@pytest.fixture
def client(
    test_settings: Settings, store: InMemoryProductStore
) -> Generator[TestClient, None, None]:
    with TestClient(create_app(test_settings, store)) as test_client:
        yield test_client


@pytest.fixture
def api_headers() -> Dict[str, str]:
    return {"x-api-key": TEST_API_KEY}


@pytest.fixture
def admin_headers(api_headers: Dict[str, str]) -> Dict[str, str]:
    return {**api_headers, "x-user-role": "admin"}
