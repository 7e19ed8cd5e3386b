"""Line-oriented segmentation of assistant text into typed display blocks.

The segmenter is render-target agnostic: it classifies each line as a heading,
list item, paragraph or blank spacer, then splits list items and paragraphs
into inline spans. Inline scanning is a single left-to-right pass that tries
``**strong**`` emphasis before currency amounts at every position, so an
amount wrapped in emphasis stays one emphasis span.
"""

from __future__ import annotations

import re
from typing import List, Tuple

from .models import DisplayBlock, Span
from .references import strip_entity_markers


_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_LIST_MARKER = re.compile(r"(?:[*-]|\d+\.)(?:\s+|$)")
_CURRENCY = re.compile(r"[A-Z]{3}[ \t]*\d+(?:,\d{3})*")
_EMPHASIS_DELIMITER = "**"


def segment_inline(text: str) -> Tuple[Span, ...]:
    """Split a line into plain, emphasis and currency spans."""

    spans: List[Span] = []
    plain: List[str] = []

    def _flush() -> None:
        if plain:
            spans.append(Span.plain("".join(plain)))
            plain.clear()

    position = 0
    length = len(text)
    delimiter_width = len(_EMPHASIS_DELIMITER)
    while position < length:
        if text.startswith(_EMPHASIS_DELIMITER, position):
            closing = text.find(_EMPHASIS_DELIMITER, position + delimiter_width)
            if closing != -1:
                inner = text[position + delimiter_width : closing]
                if inner:
                    _flush()
                    spans.append(Span.emphasis(inner))
                position = closing + delimiter_width
                continue

        if position == 0 or not text[position - 1].isalnum():
            match = _CURRENCY.match(text, position)
            if match is not None:
                _flush()
                spans.append(Span.currency(match.group()))
                position = match.end()
                continue

        plain.append(text[position])
        position += 1

    _flush()
    return tuple(spans)


def segment_line(line: str) -> DisplayBlock:
    """Classify a single line and build its display block."""

    if not line.strip():
        return DisplayBlock.blank()

    if line.startswith("#"):
        return DisplayBlock.heading(line.lstrip("#").strip())

    stripped = line.strip()
    marker = _LIST_MARKER.match(stripped)
    if marker is not None:
        return DisplayBlock.list_item(segment_inline(stripped[marker.end() :]))

    return DisplayBlock.paragraph(segment_inline(line))


def segment(text: str) -> Tuple[DisplayBlock, ...]:
    """Return the display blocks for text whose entity markers are removed."""

    if not text:
        return ()
    return tuple(segment_line(line) for line in _LINE_BREAK.split(text))


def segment_reply(raw_text: str) -> Tuple[DisplayBlock, ...]:
    """Strip entity markers from a raw reply and segment the remainder."""

    return segment(strip_entity_markers(raw_text))


__all__ = ["segment", "segment_inline", "segment_line", "segment_reply"]
