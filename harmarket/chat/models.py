"""Immutable chat records exposed to rendering consumers."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Literal, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..catalog.models import CatalogEntity


class SpanKind(str, Enum):
    """Inline classification of a run of text."""

    PLAIN = "plain"
    EMPHASIS = "emphasis"
    CURRENCY = "currency"


class BlockKind(str, Enum):
    """Structural classification of a display line."""

    HEADING = "heading"
    LIST_ITEM = "list_item"
    PARAGRAPH = "paragraph"
    BLANK = "blank"


class Span(BaseModel):
    """One inline-styled run of text within a display block."""

    model_config = ConfigDict(frozen=True)

    kind: SpanKind
    text: str

    @classmethod
    def plain(cls, text: str) -> "Span":
        return cls(kind=SpanKind.PLAIN, text=text)

    @classmethod
    def emphasis(cls, text: str) -> "Span":
        return cls(kind=SpanKind.EMPHASIS, text=text)

    @classmethod
    def currency(cls, text: str) -> "Span":
        return cls(kind=SpanKind.CURRENCY, text=text)


class DisplayBlock(BaseModel):
    """One structural unit of a rendered message.

    Headings carry ``text``; list items and paragraphs carry ``spans``; blank
    blocks carry neither.
    """

    model_config = ConfigDict(frozen=True)

    kind: BlockKind
    text: str | None = None
    spans: Tuple[Span, ...] = ()

    @classmethod
    def heading(cls, text: str) -> "DisplayBlock":
        return cls(kind=BlockKind.HEADING, text=text)

    @classmethod
    def list_item(cls, spans: Tuple[Span, ...]) -> "DisplayBlock":
        return cls(kind=BlockKind.LIST_ITEM, spans=tuple(spans))

    @classmethod
    def paragraph(cls, spans: Tuple[Span, ...]) -> "DisplayBlock":
        return cls(kind=BlockKind.PARAGRAPH, spans=tuple(spans))

    @classmethod
    def blank(cls) -> "DisplayBlock":
        return cls(kind=BlockKind.BLANK)

    @property
    def plain_text(self) -> str:
        """Return the block text with all inline styling dropped."""

        if self.text is not None:
            return self.text
        return "".join(span.text for span in self.spans)


class Citation(BaseModel):
    """A web source surfaced alongside an assistant reply."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., description="Human readable title of the source.")
    uri: str = Field(..., min_length=1, description="Link to the source.")


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


class Message(BaseModel):
    """A single utterance in the conversation log; never mutated once created."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"]
    text: str = Field(..., description="Raw text exactly as typed or received.")
    timestamp: datetime = Field(default_factory=_utcnow)
    blocks: Tuple[DisplayBlock, ...] = Field(
        default_factory=tuple,
        description="Segmented display structure of the text with markers removed.",
    )
    resolved_entities: Tuple[CatalogEntity, ...] | None = Field(
        None, description="Recommended listings; omitted when nothing resolved."
    )
    citations: Tuple[Citation, ...] | None = Field(
        None, description="Web sources; omitted when the reply carried none."
    )


class ConversationState(BaseModel):
    """Point-in-time view of the conversation log and busy flag."""

    model_config = ConfigDict(frozen=True)

    messages: Tuple[Message, ...] = ()
    pending: bool = False


__all__ = [
    "BlockKind",
    "Citation",
    "ConversationState",
    "DisplayBlock",
    "Message",
    "Span",
    "SpanKind",
]
