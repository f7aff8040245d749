"""
Cross-cutting HTTP middleware: per-client rate limiting, security headers and
request logging.

Rate limiting uses slowapi. A single application-wide limit is shared by every
route and keyed by client address, so `/health` and `/api/...` draw from the same
budget.
"""

from __future__ import annotations

import time

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from catalog_api.config import Settings
from catalog_api.utils.logging import get_logger

log = get_logger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."

SECURITY_HEADERS = {
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}


def build_limiter(settings: Settings) -> Limiter:
    return Limiter(
        key_func=get_remote_address,
        application_limits=[settings.rate_limit],
        storage_uri=settings.rate_limit_storage_uri,
        enabled=settings.rate_limit_enabled,
    )


def _rate_limited(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    # slowapi's middleware calls this handler directly, so it stays synchronous.
    log.warning(
        "Rate limit exceeded",
        extra={"client": get_remote_address(request), "limit": str(exc.detail)},
    )
    return JSONResponse(status_code=429, content={"error": RATE_LIMIT_MESSAGE})


def install_middleware(app: FastAPI, settings: Settings) -> None:
    """
    Attach rate limiting, security headers and request logging to `app`.

    The limiter is stored on `app.state.limiter`, where slowapi looks it up.
    """
    app.state.limiter = build_limiter(settings)
    app.add_exception_handler(RateLimitExceeded, _rate_limited)
    app.add_middleware(SlowAPIMiddleware)

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        log.info(
            f"{request.method} {request.url.path} {response.status_code}",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status": response.status_code,
                "duration_ms": round((time.perf_counter() - start) * 1000, 2),
            },
        )
        return response


__all__ = ["RATE_LIMIT_MESSAGE", "SECURITY_HEADERS", "build_limiter", "install_middleware"]
