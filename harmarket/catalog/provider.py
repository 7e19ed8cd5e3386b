"""Catalog provider boundary and an in-memory implementation."""

from __future__ import annotations

from typing import Iterable, Protocol, Sequence, Tuple, runtime_checkable

from .models import CatalogEntity


@runtime_checkable
class CatalogProvider(Protocol):
    """Read-only access to the current marketplace listings."""

    def list_all(self) -> Sequence[CatalogEntity]:
        """Return every listing currently known to the catalog."""


class StaticCatalog:
    """Catalog provider backed by an in-memory tuple of listings."""

    def __init__(self, entities: Iterable[CatalogEntity] = ()) -> None:
        self._entities: Tuple[CatalogEntity, ...] = tuple(entities)

    def list_all(self) -> Sequence[CatalogEntity]:
        return self._entities

    def replace(self, entities: Iterable[CatalogEntity]) -> None:
        """Swap the listings wholesale, as a catalog refresh would."""

        self._entities = tuple(entities)


def capture_snapshot(provider: CatalogProvider) -> Tuple[CatalogEntity, ...]:
    """Return an immutable copy of the provider's listings."""

    return tuple(provider.list_all())


__all__ = ["CatalogProvider", "StaticCatalog", "capture_snapshot"]
