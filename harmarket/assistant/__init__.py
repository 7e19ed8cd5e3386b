"""Assistant gateway package exposing the backend boundary."""

from __future__ import annotations

from .factory import build_agent, get_agent
from .gateway import (
    AssistantGateway,
    GatewayError,
    GatewayResponseError,
    GatewayTimeout,
    PydanticAIGateway,
    TimeoutGateway,
    harvest_citation_chunks,
)
from .prompts import (
    EMPTY_REPLY_TEXT,
    FALLBACK_REPLY_TEXT,
    SEED_PROMPTS,
    render_system_instruction,
)
from .schemas import GatewayReply, GatewayRequest

__all__ = [
    "AssistantGateway",
    "EMPTY_REPLY_TEXT",
    "FALLBACK_REPLY_TEXT",
    "GatewayError",
    "GatewayReply",
    "GatewayRequest",
    "GatewayResponseError",
    "GatewayTimeout",
    "PydanticAIGateway",
    "SEED_PROMPTS",
    "TimeoutGateway",
    "build_agent",
    "get_agent",
    "harvest_citation_chunks",
    "render_system_instruction",
]
