"""Extraction and removal of inline ``[ID: ...]`` entity markers."""

from __future__ import annotations

import re
from typing import List


_MARKER_PATTERN = re.compile(r"\[\s*ID:\s*([\w-]+)\s*\]", re.ASCII)
# Horizontal whitespace before a marker goes with it so "Bike [ID: p1] is"
# collapses to "Bike is".
_MARKER_WITH_LEADING_SPACE = re.compile(r"[ \t]*\[\s*ID:\s*[\w-]+\s*\]", re.ASCII)


def extract_entity_references(text: str) -> List[str]:
    """Return distinct entity identifiers in first-seen order.

    Malformed markers (unclosed brackets, characters outside ASCII word characters
    and hyphens) are not matched; an empty list is returned when nothing
    matches.
    """

    if not text:
        return []

    identifiers: List[str] = []
    seen: set[str] = set()
    for match in _MARKER_PATTERN.finditer(text):
        identifier = match.group(1)
        if identifier in seen:
            continue
        seen.add(identifier)
        identifiers.append(identifier)
    return identifiers


def strip_entity_markers(text: str) -> str:
    """Return ``text`` with every well-formed entity marker removed."""

    if not text:
        return ""
    return _MARKER_WITH_LEADING_SPACE.sub("", text)


__all__ = ["extract_entity_references", "strip_entity_markers"]
