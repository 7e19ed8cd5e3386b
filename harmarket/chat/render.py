"""Plain-text rendering of display blocks for terminals and logs."""

from __future__ import annotations

from typing import Iterable, List

from .models import BlockKind, DisplayBlock, Message


_BULLET = "• "


def render_plain(blocks: Iterable[DisplayBlock]) -> str:
    """Render blocks as plain text lines with bullets for list items."""

    lines: List[str] = []
    for block in blocks:
        if block.kind is BlockKind.BLANK:
            lines.append("")
        elif block.kind is BlockKind.LIST_ITEM:
            lines.append(_BULLET + block.plain_text)
        else:
            lines.append(block.plain_text)
    return "\n".join(lines)


def render_message(message: Message) -> str:
    """Render a message body followed by its recommendations and sources."""

    sections = [render_plain(message.blocks)]
    if message.resolved_entities:
        sections.append(
            "Recommended:\n"
            + "\n".join(
                f"{_BULLET}{entity.name} ({entity.location})"
                for entity in message.resolved_entities
            )
        )
    if message.citations:
        sections.append(
            "Web Citations:\n"
            + "\n".join(
                f"{_BULLET}{citation.title} <{citation.uri}>"
                for citation in message.citations
            )
        )
    return "\n\n".join(sections)


__all__ = ["render_message", "render_plain"]
