"""Normalise loosely typed grounding metadata into ``Citation`` records."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable, List

from .models import Citation


DEFAULT_CITATION_TITLE = "Source"


def _field(container: Any, name: str) -> Any:
    """Read ``name`` from a mapping or an attribute-bearing object."""

    if container is None:
        return None
    if isinstance(container, Mapping):
        return container.get(name)
    return getattr(container, name, None)


def citation_from_chunk(chunk: Any) -> Citation | None:
    """Return a citation for chunks whose ``web.uri`` is a non-empty string."""

    web = _field(chunk, "web")
    uri = _field(web, "uri")
    if not isinstance(uri, str) or not uri.strip():
        return None

    title = _field(web, "title")
    if not isinstance(title, str) or not title.strip():
        title = DEFAULT_CITATION_TITLE
    return Citation(title=title, uri=uri)


def extract_citations(chunks: Iterable[Any] | None) -> List[Citation]:
    """Return citations in source order; duplicates are kept as received."""

    if not chunks:
        return []

    citations: List[Citation] = []
    for chunk in chunks:
        citation = citation_from_chunk(chunk)
        if citation is not None:
            citations.append(citation)
    return citations


__all__ = ["DEFAULT_CITATION_TITLE", "citation_from_chunk", "extract_citations"]
