"""Serialise catalog snapshots into the inventory block sent to the assistant."""

from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from .models import CatalogEntity


EMPTY_INVENTORY_SENTINEL = "No items currently listed in the store."


def format_price(price: Decimal) -> str:
    """Render a price as a plain decimal without exponent or trailing zeros."""

    text = format(price, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_inventory_line(entity: CatalogEntity, currency: str) -> str:
    return (
        f"[ID: {entity.id}] {entity.name} - {currency} {format_price(entity.price)}"
        f" in {entity.location}"
    )


def build_inventory_context(
    entities: Sequence[CatalogEntity],
    *,
    currency: str = "KES",
    max_items: int | None = None,
) -> str:
    """Return one line per listing, or the fixed sentinel for an empty catalog."""

    if not entities:
        return EMPTY_INVENTORY_SENTINEL

    shown = entities if max_items is None else entities[:max_items]
    lines = [format_inventory_line(entity, currency) for entity in shown]
    hidden = len(entities) - len(shown)
    if hidden > 0:
        lines.append(f"({hidden} more items not listed)")
    return "\n".join(lines)


__all__ = [
    "EMPTY_INVENTORY_SENTINEL",
    "build_inventory_context",
    "format_inventory_line",
    "format_price",
]
