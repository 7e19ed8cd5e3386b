"""In-memory registry of conversation sessions keyed by session identifier."""

from __future__ import annotations

import asyncio
from typing import Callable

from cachetools import TTLCache

from ..config import settings
from .session import ConversationSession


SessionFactory = Callable[[str], ConversationSession]


class SessionStore:
    """Hands out one :class:`ConversationSession` per session identifier.

    Sessions start empty and live only in memory; idle sessions expire after
    the configured TTL.
    """

    def __init__(
        self,
        factory: SessionFactory,
        *,
        maxsize: int = 1024,
        ttl_seconds: float | None = None,
    ) -> None:
        self._factory = factory
        self._sessions: TTLCache[str, ConversationSession] = TTLCache(
            maxsize=maxsize,
            ttl=ttl_seconds if ttl_seconds is not None else settings.session_ttl_seconds,
        )
        self._lock = asyncio.Lock()

    async def get_or_create(self, session_id: str) -> ConversationSession:
        """Return the live session for ``session_id``, creating it when absent."""

        async with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                session = self._factory(session_id)
            # Refresh the TTL so active conversations stay warm.
            self._sessions[session_id] = session
            return session

    async def get(self, session_id: str) -> ConversationSession | None:
        async with self._lock:
            return self._sessions.get(session_id)

    async def reset(self, session_id: str) -> None:
        """Forget the session so the next lookup starts a fresh transcript."""

        async with self._lock:
            self._sessions.pop(session_id, None)

    async def reset_all(self) -> None:
        async with self._lock:
            self._sessions.clear()

    def __len__(self) -> int:
        return len(self._sessions)


__all__ = ["SessionFactory", "SessionStore"]
