"""Map entity references from assistant replies onto catalog listings."""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

from .models import CatalogEntity


def resolve_entities(
    identifiers: Iterable[str], snapshot: Sequence[CatalogEntity]
) -> List[CatalogEntity]:
    """Return the listings matching ``identifiers`` in first-seen order.

    Unknown identifiers are skipped because the catalog may have changed
    between building the prompt and receiving the reply. Repeated identifiers
    resolve once.
    """

    by_id: Dict[str, CatalogEntity] = {}
    for entity in snapshot:
        by_id.setdefault(entity.id, entity)

    resolved: List[CatalogEntity] = []
    seen: set[str] = set()
    for identifier in identifiers:
        if identifier in seen:
            continue
        entity = by_id.get(identifier)
        if entity is None:
            continue
        resolved.append(entity)
        seen.add(identifier)
    return resolved


__all__ = ["resolve_entities"]
