"""Pydantic models describing marketplace listings."""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field


class ProductCategory(str, Enum):
    """Category tags used by the marketplace."""

    ELECTRONICS = "Electronics"
    FURNITURE = "Furniture"
    VEHICLES = "Vehicles"
    CLOTHING = "Clothing"
    OTHER = "Other"


class ProductCondition(str, Enum):
    """Whether a listing is new or second hand."""

    NEW = "New"
    USED = "Used"


class ProductStatus(str, Enum):
    """Availability of a listing."""

    AVAILABLE = "Available"
    SOLD_OUT = "Sold Out"


class CatalogEntity(BaseModel):
    """Read-only snapshot of a single marketplace listing."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Stable listing identifier.")
    name: str = Field(..., description="Display name of the listing.")
    price: Decimal = Field(..., ge=0, description="Asking price in the store currency.")
    location: str = Field(..., description="Free-text pickup location.")
    category: ProductCategory | str = Field(
        ProductCategory.OTHER, description="Category tag of the listing."
    )
    condition: ProductCondition | None = Field(
        None, description="New or used, when the seller provided it."
    )
    status: ProductStatus = Field(
        ProductStatus.AVAILABLE, description="Availability of the listing."
    )
    stock: int | None = Field(None, ge=0, description="Units available, if tracked.")
    description: str | None = Field(None, description="Seller-provided description.")
    images: Tuple[str, ...] = Field(
        default_factory=tuple, description="Image URLs hosted externally."
    )
    seller_phone: str | None = Field(None, description="Seller contact number.")
    is_featured: bool = Field(False, description="Whether the listing is promoted.")


__all__ = [
    "CatalogEntity",
    "ProductCategory",
    "ProductCondition",
    "ProductStatus",
]
