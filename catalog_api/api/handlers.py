"""
Exception handlers mapping catalog errors to JSON responses.

Every error body carries an `error` title; most add a human `message`.
Validation failures list their problems under `messages` instead.
"""

from __future__ import annotations

import traceback
from typing import Any, Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog_api.errors import ApiError, InvalidQueryParameterError, ProductNotFoundError
from catalog_api.utils.logging import get_logger

log = get_logger(__name__)

AVAILABLE_ENDPOINTS = [
    "GET /api/products",
    "GET /api/products/:id",
    "POST /api/products",
    "PUT /api/products/:id",
    "DELETE /api/products/:id",
    "GET /health",
]


def _format_validation_error(error: Dict[str, Any]) -> str:
    location = [str(part) for part in error.get("loc", ()) if part not in ("body", "path")]
    message = str(error.get("msg", "")).removeprefix("Value error, ")
    return f"{'.'.join(location)}: {message}" if location else message


async def _api_error(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code, content={"error": exc.error, "message": exc.message}
    )


async def _product_not_found(request: Request, exc: ProductNotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=404, content={"error": "Product not found", "message": str(exc)}
    )


async def _invalid_query(request: Request, exc: InvalidQueryParameterError) -> JSONResponse:
    return JSONResponse(
        status_code=400, content={"error": "Invalid query parameter", "message": str(exc)}
    )


async def _validation_failed(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages: List[str] = [_format_validation_error(error) for error in exc.errors()]
    return JSONResponse(
        status_code=400, content={"error": "Validation failed", "messages": messages}
    )


async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code in (404, 405):
        # An unsupported method on a known path is an unknown route too.
        content: Dict[str, Any] = {
            "error": "Route not found",
            "message": f"The route {request.method} {request.url.path} does not exist",
            "availableEndpoints": AVAILABLE_ENDPOINTS,
        }
        return JSONResponse(status_code=404, content=content)
    content = {"error": str(exc.detail), "message": str(exc.detail)}
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


async def _unhandled(request: Request, exc: Exception) -> JSONResponse:
    log.error(
        "Unhandled error",
        exc_info=exc,
        extra={"method": request.method, "path": request.url.path},
    )
    settings = request.app.state.settings
    content: Dict[str, Any] = {
        "error": "Internal Server Error",
        "message": "Something went wrong!" if settings.is_production else str(exc),
    }
    if settings.app_env.lower() == "development":
        content["stack"] = "".join(traceback.format_exception(exc))
    return JSONResponse(status_code=500, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, _api_error)
    app.add_exception_handler(ProductNotFoundError, _product_not_found)
    app.add_exception_handler(InvalidQueryParameterError, _invalid_query)
    app.add_exception_handler(RequestValidationError, _validation_failed)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(Exception, _unhandled)


__all__ = ["AVAILABLE_ENDPOINTS", "register_exception_handlers"]
