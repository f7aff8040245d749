"""
Product Catalog API: FastAPI application factory.

Usage:
    uvicorn catalog_api.api.app:create_app --factory --reload

Responses carry security headers, and all routes share a per-client rate limit.

Endpoints:
- GET    /health                -> liveness report (no auth)
- GET    /api/products          -> query with search, filters, sorting, pagination
- GET    /api/products/{id}     -> single product
- POST   /api/products          -> create (admin)
- PUT    /api/products/{id}     -> update (admin)
- DELETE /api/products/{id}     -> delete (admin)
"""

from __future__ import annotations

import time
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from catalog_api import __version__
from catalog_api.api.handlers import register_exception_handlers
from catalog_api.api.middleware import install_middleware
from catalog_api.api.routes import health_router, products_router
from catalog_api.config import Settings, get_settings
from catalog_api.store.abstract import ProductStore
from catalog_api.store.memory import InMemoryProductStore
from catalog_api.utils.logging import get_logger

log = get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[ProductStore] = None,
) -> FastAPI:
    """
    Build the application around a settings object and a product store.

    Parameters
    ----------
    settings : Settings | None
        Defaults to the cached environment settings.
    store : ProductStore | None
        Defaults to an in-memory store seeded according to `settings`.
    """
    settings = settings or get_settings()
    if store is None:
        store = InMemoryProductStore.from_settings(settings)
    if settings.api_key is None:
        log.warning("API_KEY is not set; every /api request will be rejected with 403")

    app = FastAPI(
        title="Product Catalog API",
        version=__version__,
        description="Product records with search, filtering, sorting and pagination.",
    )
    app.state.settings = settings
    app.state.store = store
    app.state.started_at = time.monotonic()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_middleware(app, settings)

    register_exception_handlers(app)
    app.include_router(health_router)
    app.include_router(products_router)
    return app


__all__ = ["create_app"]
