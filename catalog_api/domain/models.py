"""
Domain models for the Product Catalog API.

`Product` is the record every other layer reads: the store owns the live
collection, the query engine reads snapshots of it and the HTTP layer
serializes it. Field names are snake_case in Python and camelCase on the wire.

`ProductCreate` and `ProductUpdate` are the request bodies for mutations; they
carry the validation rules the store relies on.
"""
from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

NAME_REQUIRED = "Product name is required and must be a non-empty string"
PRICE_REQUIRED = "Product price is required and must be a positive number"
CATEGORY_REQUIRED = "Product category is required and must be a non-empty string"


class Product(BaseModel):
    """
    A single catalog entry.
    """

    id: int = Field(..., ge=1, description="Store-assigned identifier, immutable.")
    name: str = Field(..., min_length=1, description="Display name.")
    description: str = Field("", description="Free-text description, may be empty.")
    price: float = Field(..., gt=0, allow_inf_nan=False, description="Unit price.")
    category: str = Field(..., min_length=1, description="Category label.")
    in_stock: bool = Field(True, description="Whether the product can be ordered.")
    stock_quantity: int = Field(0, ge=0, description="Units on hand.")
    created_at: datetime = Field(..., description="Creation timestamp, never changes.")
    updated_at: datetime = Field(..., description="Last mutation timestamp.")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "alias_generator": to_camel,
    }

    @field_validator("created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # Naive and aware datetimes cannot be compared; treat naive ones as UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @model_validator(mode="after")
    def _check_timestamps(self) -> "Product":
        if self.updated_at < self.created_at:
            raise ValueError("updatedAt must not precede createdAt")
        return self


class _ProductBody(BaseModel):
    """
    Fields validated on both create and update.

    The required fields default to None so an absent field reaches its
    validator and reports the same message as an invalid one.
    """

    name: str = Field(None, validate_default=True)
    price: float = Field(None, validate_default=True)
    category: str = Field(None, validate_default=True)

    model_config = {
        "populate_by_name": True,
        "alias_generator": to_camel,
        "extra": "ignore",
    }

    @field_validator("name", mode="before")
    @classmethod
    def _check_name(cls, value: object) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError(NAME_REQUIRED)
        return value.strip()

    @field_validator("category", mode="before")
    @classmethod
    def _check_category(cls, value: object) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError(CATEGORY_REQUIRED)
        return value.strip()

    @field_validator("price", mode="before")
    @classmethod
    def _check_price(cls, value: object) -> float:
        if (
            isinstance(value, bool)
            or not isinstance(value, (int, float))
            or not math.isfinite(value)
            or not value > 0
        ):
            raise ValueError(PRICE_REQUIRED)
        return float(value)


class ProductCreate(_ProductBody):
    """Request body for creating a product."""

    description: Optional[str] = None
    in_stock: bool = True
    stock_quantity: int = Field(0, ge=0)

    @field_validator("description")
    @classmethod
    def _strip_description(cls, value: Optional[str]) -> Optional[str]:
        return value.strip() if value is not None else None


class ProductUpdate(_ProductBody):
    """
    Request body for updating a product.

    `name`, `price` and `category` are always required. Omitted optional fields
    (and an empty description) keep the stored value.
    """

    description: Optional[str] = None
    in_stock: Optional[bool] = None
    stock_quantity: Optional[int] = Field(None, ge=0)

    @field_validator("description")
    @classmethod
    def _strip_description(cls, value: Optional[str]) -> Optional[str]:
        return value.strip() if value is not None else None


__all__ = [
    "CATEGORY_REQUIRED",
    "NAME_REQUIRED",
    "PRICE_REQUIRED",
    "Product",
    "ProductCreate",
    "ProductUpdate",
]
