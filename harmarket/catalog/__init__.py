"""Catalog snapshot models, providers and helpers."""

from .context import EMPTY_INVENTORY_SENTINEL, build_inventory_context
from .models import CatalogEntity, ProductCategory, ProductCondition, ProductStatus
from .provider import CatalogProvider, StaticCatalog, capture_snapshot
from .resolver import resolve_entities

__all__ = [
    "EMPTY_INVENTORY_SENTINEL",
    "CatalogEntity",
    "CatalogProvider",
    "ProductCategory",
    "ProductCondition",
    "ProductStatus",
    "StaticCatalog",
    "build_inventory_context",
    "capture_snapshot",
    "resolve_entities",
]
