"""Conversation state machine driving one chat transcript.

A session is either idle or pending. Submitting non-blank text while idle
appends the user message, flips to pending and sends one gateway request;
submissions while pending are dropped. When the request settles the reply is
parsed, resolved against the catalog snapshot captured at submission time,
segmented, and appended together with the flip back to idle. Gateway failures
of any kind become a fixed apology message.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Iterable, List, Sequence, Tuple

import logfire

from ..assistant.gateway import AssistantGateway, GatewayTimeout, TimeoutGateway
from ..assistant.prompts import FALLBACK_REPLY_TEXT, render_system_instruction
from ..assistant.schemas import GatewayRequest
from ..catalog.context import build_inventory_context
from ..catalog.models import CatalogEntity
from ..catalog.provider import CatalogProvider, capture_snapshot
from ..catalog.resolver import resolve_entities
from ..config import settings
from ..logging import ConversationLogger, _ensure_logfire
from .citations import extract_citations
from .models import ConversationState, Message
from .references import extract_entity_references
from .segmenter import segment_reply


StateListener = Callable[[ConversationState], None]


def compose_user_message(text: str) -> Message:
    """Build the log entry for a user submission."""

    return Message(role="user", text=text, blocks=segment_reply(text))


def compose_assistant_message(
    reply_text: str,
    raw_citation_chunks: Iterable[Any] | None,
    snapshot: Sequence[CatalogEntity],
) -> Message:
    """Merge resolved listings, citations and display blocks into one message."""

    entities = resolve_entities(extract_entity_references(reply_text), snapshot)
    citations = extract_citations(raw_citation_chunks)
    return Message(
        role="assistant",
        text=reply_text,
        blocks=segment_reply(reply_text),
        resolved_entities=tuple(entities) or None,
        citations=tuple(citations) or None,
    )


def compose_fallback_message() -> Message:
    return Message(
        role="assistant",
        text=FALLBACK_REPLY_TEXT,
        blocks=segment_reply(FALLBACK_REPLY_TEXT),
    )


class ConversationSession:
    """Owns the ordered message log and the idle/pending flag for one chat."""

    def __init__(
        self,
        gateway: AssistantGateway,
        catalog: CatalogProvider,
        *,
        session_id: str | None = None,
        currency: str | None = None,
        context_max_items: int | None = None,
        web_grounding: bool | None = None,
        timeout_seconds: float | None = None,
        transcript: ConversationLogger | None = None,
    ) -> None:
        _ensure_logfire()
        self.session_id = session_id
        self._gateway = TimeoutGateway(
            gateway,
            timeout_seconds
            if timeout_seconds is not None
            else settings.request_timeout_seconds,
        )
        self._catalog = catalog
        self._currency = currency or settings.currency
        self._context_max_items = (
            context_max_items
            if context_max_items is not None
            else settings.context_max_items
        )
        self._web_grounding = (
            web_grounding if web_grounding is not None else settings.web_grounding
        )
        self._transcript = transcript
        self._messages: List[Message] = []
        self._pending = False
        self._listeners: List[StateListener] = []

    @property
    def pending(self) -> bool:
        return self._pending

    @property
    def messages(self) -> Tuple[Message, ...]:
        return tuple(self._messages)

    def snapshot(self) -> ConversationState:
        """Return an immutable view of the log and the pending flag."""

        return ConversationState(messages=tuple(self._messages), pending=self._pending)

    def add_listener(self, listener: StateListener) -> Callable[[], None]:
        """Call ``listener`` after every transition; returns an unsubscribe hook."""

        self._listeners.append(listener)

        def _remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _remove

    async def submit(self, text: str) -> Message | None:
        """Send ``text`` to the assistant and return the settled reply.

        Returns ``None`` without touching the log when a request is already in
        flight or the text is blank.
        """

        if self._pending:
            logfire.info("chat.submit_ignored", session_id=self.session_id, reason="pending")
            return None
        if not text or not text.strip():
            logfire.debug("chat.submit_ignored", session_id=self.session_id, reason="blank")
            return None

        snapshot = self._capture_catalog()
        user_message = compose_user_message(text)
        # No await between the pending check above and this transition.
        self._messages.append(user_message)
        self._pending = True
        self._notify()
        logfire.info(
            "chat.submit",
            session_id=self.session_id,
            turn=len(self._messages),
            catalog_size=len(snapshot),
        )

        reply = await self._settle(text, snapshot)
        await self._record(user_message)
        await self._record(reply)
        return reply

    def _capture_catalog(self) -> Tuple[CatalogEntity, ...]:
        try:
            return capture_snapshot(self._catalog)
        except Exception as exc:
            logfire.exception(
                "chat.catalog_unavailable", session_id=self.session_id, error=str(exc)
            )
            return ()

    def _build_request(
        self, text: str, snapshot: Sequence[CatalogEntity]
    ) -> GatewayRequest:
        inventory = build_inventory_context(
            snapshot, currency=self._currency, max_items=self._context_max_items
        )
        return GatewayRequest(
            user_text=text,
            inventory_context=inventory,
            system_instruction=render_system_instruction(
                inventory, currency=self._currency
            ),
            enable_web_grounding=self._web_grounding,
        )

    async def _settle(
        self, text: str, snapshot: Sequence[CatalogEntity]
    ) -> Message:
        # Everything between the pending flip and the final append runs under
        # this guard so the session always returns to idle.
        try:
            request = self._build_request(text, snapshot)
            reply = await self._gateway.generate(request)
            message = compose_assistant_message(
                reply.reply_text, reply.raw_citation_chunks, snapshot
            )
        except asyncio.CancelledError:
            logfire.warning("chat.request_cancelled", session_id=self.session_id)
            self._finish(compose_fallback_message())
            raise
        except GatewayTimeout as exc:
            logfire.warning("chat.gateway_timeout", session_id=self.session_id, error=str(exc))
            message = compose_fallback_message()
        except Exception as exc:
            logfire.exception("chat.gateway_failure", session_id=self.session_id, error=str(exc))
            message = compose_fallback_message()
        else:
            logfire.info(
                "chat.reply",
                session_id=self.session_id,
                entities=len(message.resolved_entities or ()),
                citations=len(message.citations or ()),
            )

        self._finish(message)
        return message

    def _finish(self, message: Message) -> None:
        # Append and flag reset happen together so observers never see one
        # without the other.
        self._messages.append(message)
        self._pending = False
        self._notify()

    def _notify(self) -> None:
        if not self._listeners:
            return
        state = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logfire.exception("chat.listener_failed", session_id=self.session_id)

    async def _record(self, message: Message) -> None:
        if self._transcript is None:
            return
        try:
            await self._transcript.record(self.session_id, message)
        except Exception:
            logfire.exception("chat.transcript_failed", session_id=self.session_id)


__all__ = [
    "ConversationSession",
    "StateListener",
    "compose_assistant_message",
    "compose_fallback_message",
    "compose_user_message",
]
