"""FastAPI dependencies: app-scoped collaborators, API-key auth and admin checks."""

from __future__ import annotations

import secrets
from typing import Optional

from fastapi import Header, Request

from catalog_api.config import Settings
from catalog_api.errors import ApiError
from catalog_api.store.abstract import ProductStore


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> ProductStore:
    return request.app.state.store


def require_api_key(request: Request, x_api_key: Optional[str] = Header(None)) -> None:
    """
    Reject requests without a valid `x-api-key` header.

    Missing key is 401; a wrong key, or no key configured on the server, is 403.
    """
    if not x_api_key:
        raise ApiError(
            401, "API key is required", "Please provide an API key in the x-api-key header"
        )
    expected = get_app_settings(request).api_key
    if expected is None or not secrets.compare_digest(x_api_key, expected):
        raise ApiError(403, "Invalid API key", "The provided API key is not valid")


def require_admin(x_user_role: str = Header("user")) -> None:
    """Mutations require `x-user-role: admin`."""
    if x_user_role != "admin":
        raise ApiError(403, "Access denied", "Admin privileges required for this operation")


__all__ = ["get_app_settings", "get_store", "require_admin", "require_api_key"]
