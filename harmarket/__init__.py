"""HarMarket conversational recommendation engine."""

from __future__ import annotations

from pathlib import Path

from .assistant import PydanticAIGateway
from .catalog import CatalogProvider
from .chat import ConversationSession, SessionStore
from .config import Settings, settings as default_settings
from .logging import ConversationLogger


def create_session_store(
    catalog: CatalogProvider, settings: Settings | None = None
) -> SessionStore:
    """Wire a session store around the pydantic-ai gateway and ``catalog``."""

    config = settings or default_settings
    gateway = PydanticAIGateway(config)
    transcript = (
        ConversationLogger(Path(config.transcript_path))
        if config.transcript_path is not None
        else None
    )

    def _factory(session_id: str) -> ConversationSession:
        return ConversationSession(
            gateway,
            catalog,
            session_id=session_id,
            currency=config.currency,
            context_max_items=config.context_max_items,
            web_grounding=config.web_grounding,
            timeout_seconds=config.request_timeout_seconds,
            transcript=transcript,
        )

    return SessionStore(_factory, ttl_seconds=config.session_ttl_seconds)


__all__ = ["create_session_store"]
