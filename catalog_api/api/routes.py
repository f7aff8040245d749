"""HTTP routes: health reporting and the product collection."""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request

from catalog_api.api.dependencies import (
    get_app_settings,
    get_store,
    require_admin,
    require_api_key,
)
from catalog_api.config import Settings
from catalog_api.domain.models import Product, ProductCreate, ProductUpdate
from catalog_api.query.params import parse_query_parameters
from catalog_api.query.pipeline import execute
from catalog_api.store.abstract import ProductStore

health_router = APIRouter(tags=["health"])
products_router = APIRouter(
    prefix="/api/products",
    tags=["products"],
    dependencies=[Depends(require_api_key)],
)


def _dump(product: Product) -> Dict[str, Any]:
    return product.model_dump(mode="json", by_alias=True)


@health_router.get("/health")
def health(request: Request, settings: Settings = Depends(get_app_settings)) -> Dict[str, Any]:
    """Liveness report."""
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - request.app.state.started_at, 3),
        "environment": settings.app_env,
    }


@products_router.get("", summary="List products with search, filters, sorting and pagination")
def list_products(
    request: Request,
    store: ProductStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> Dict[str, Any]:
    params = parse_query_parameters(request.query_params, max_limit=settings.max_page_limit)
    result = execute(store.snapshot(), params)
    return {"success": True, **result.model_dump(mode="json", by_alias=True)}


@products_router.get("/{product_id}", summary="Get a product by id")
def get_product(product_id: int, store: ProductStore = Depends(get_store)) -> Dict[str, Any]:
    return {"success": True, "data": _dump(store.get(product_id))}


@products_router.post(
    "",
    status_code=201,
    dependencies=[Depends(require_admin)],
    summary="Create a product",
)
def create_product(
    payload: ProductCreate, store: ProductStore = Depends(get_store)
) -> Dict[str, Any]:
    product = store.create(payload)
    return {"success": True, "message": "Product created successfully", "data": _dump(product)}


@products_router.put(
    "/{product_id}",
    dependencies=[Depends(require_admin)],
    summary="Update a product",
)
def update_product(
    product_id: int, payload: ProductUpdate, store: ProductStore = Depends(get_store)
) -> Dict[str, Any]:
    product = store.update(product_id, payload)
    return {"success": True, "message": "Product updated successfully", "data": _dump(product)}


@products_router.delete(
    "/{product_id}",
    dependencies=[Depends(require_admin)],
    summary="Delete a product",
)
def delete_product(product_id: int, store: ProductStore = Depends(get_store)) -> Dict[str, Any]:
    product = store.delete(product_id)
    return {"success": True, "message": "Product deleted successfully", "data": _dump(product)}


__all__ = ["health_router", "products_router"]
