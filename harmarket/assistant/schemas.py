"""Request and reply contracts for the assistant gateway boundary."""

from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field


class GatewayRequest(BaseModel):
    """Everything the assistant backend needs to answer one user turn."""

    model_config = ConfigDict(frozen=True)

    user_text: str = Field(..., description="Latest user message, verbatim.")
    inventory_context: str = Field(
        ..., description="Line-per-listing serialization of the catalog snapshot."
    )
    system_instruction: str = Field(
        ..., description="Persona and formatting rules, inventory included."
    )
    enable_web_grounding: bool = Field(
        True, description="Allow the backend to ground answers with web search."
    )


class GatewayReply(BaseModel):
    """Unstructured assistant output plus whatever grounding metadata came back."""

    reply_text: str = Field(..., description="Assistant reply with inline markers.")
    raw_citation_chunks: List[Any] = Field(
        default_factory=list,
        description="Opaque grounding chunks, each optionally carrying a ``web`` object.",
    )


__all__ = ["GatewayReply", "GatewayRequest"]
