"""Conversational recommendation engine: parsing, segmentation and state."""

from .citations import DEFAULT_CITATION_TITLE, extract_citations
from .models import (
    BlockKind,
    Citation,
    ConversationState,
    DisplayBlock,
    Message,
    Span,
    SpanKind,
)
from .references import extract_entity_references, strip_entity_markers
from .render import render_message, render_plain
from .segmenter import segment, segment_inline, segment_reply
from .session import (
    ConversationSession,
    compose_assistant_message,
    compose_fallback_message,
    compose_user_message,
)
from .store import SessionStore

__all__ = [
    "BlockKind",
    "Citation",
    "ConversationSession",
    "ConversationState",
    "DEFAULT_CITATION_TITLE",
    "DisplayBlock",
    "Message",
    "SessionStore",
    "Span",
    "SpanKind",
    "compose_assistant_message",
    "compose_fallback_message",
    "compose_user_message",
    "extract_citations",
    "extract_entity_references",
    "render_message",
    "render_plain",
    "segment",
    "segment_inline",
    "segment_reply",
    "strip_entity_markers",
]
