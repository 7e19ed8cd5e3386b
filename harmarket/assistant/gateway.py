"""Assistant gateway boundary and its pydantic-ai backed implementation."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any, Callable, List, Protocol, Sequence

import logfire
from pydantic_ai import Agent
from pydantic_ai.exceptions import AgentRunError, UserError
from pydantic_ai.messages import BuiltinToolReturnPart, ModelMessage, ModelResponse
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_fixed

from ..config import Settings, settings as default_settings
from .factory import get_agent
from .prompts import EMPTY_REPLY_TEXT
from .schemas import GatewayReply, GatewayRequest


_WEB_SEARCH_TOOL_NAME = "web_search"
_RETRY_WAIT_SECONDS = 0.25


class GatewayError(RuntimeError):
    """Base exception for assistant gateway failures."""


class GatewayTimeout(GatewayError):
    """Raised when the assistant does not answer within the allotted time."""


class GatewayResponseError(GatewayError):
    """Raised when the assistant backend fails or returns an unusable response."""


class AssistantGateway(Protocol):
    """Sends one composed request to the assistant backend."""

    async def generate(self, request: GatewayRequest) -> GatewayReply:
        """Return the reply for ``request`` or raise on failure."""


class TimeoutGateway:
    """Wrap a gateway so that slow requests fail with :class:`GatewayTimeout`."""

    def __init__(self, inner: AssistantGateway, timeout_seconds: float) -> None:
        self._inner = inner
        self.timeout_seconds = timeout_seconds

    async def generate(self, request: GatewayRequest) -> GatewayReply:
        try:
            return await asyncio.wait_for(
                self._inner.generate(request), timeout=self.timeout_seconds
            )
        except asyncio.TimeoutError as exc:
            raise GatewayTimeout(
                f"Assistant did not respond within {self.timeout_seconds:g}s"
            ) from exc


def _chunks_from_content(content: Any) -> List[Any]:
    """Coerce a web-search return payload into ``{"web": {...}}`` chunks."""

    if isinstance(content, Mapping):
        for key in ("sources", "results", "grounding_chunks"):
            nested = content.get(key)
            if isinstance(nested, list):
                return _chunks_from_content(nested)
        return _chunks_from_content([content])

    if not isinstance(content, list):
        return []

    chunks: List[Any] = []
    for item in content:
        if isinstance(item, Mapping) and "web" in item:
            chunks.append(dict(item))
        elif isinstance(item, Mapping):
            chunks.append({"web": dict(item)})
    return chunks


def harvest_citation_chunks(messages: Sequence[ModelMessage]) -> List[Any]:
    """Collect grounding chunks from the web-search parts of a model run."""

    chunks: List[Any] = []
    for message in messages:
        if not isinstance(message, ModelResponse):
            continue
        for part in message.parts:
            if (
                isinstance(part, BuiltinToolReturnPart)
                and part.tool_name == _WEB_SEARCH_TOOL_NAME
            ):
                chunks.extend(_chunks_from_content(part.content))
    return chunks


class PydanticAIGateway:
    """Gateway that runs a pydantic-ai agent against Gemini or OpenAI."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        agent_factory: Callable[[bool], Agent[GatewayRequest, str]] | None = None,
    ) -> None:
        self._settings = settings or default_settings
        self._agent_factory = agent_factory or (
            lambda web_grounding: get_agent(self._settings, web_grounding)
        )

    async def generate(self, request: GatewayRequest) -> GatewayReply:
        try:
            agent = self._agent_factory(request.enable_web_grounding)
        except UserError as exc:
            raise GatewayResponseError(f"Assistant backend is misconfigured: {exc}") from exc

        with logfire.span(
            "assistant.generate",
            grounding=request.enable_web_grounding,
            user_text_length=len(request.user_text),
        ):
            try:
                result = await self._run_with_retry(agent, request)
            except AgentRunError as exc:
                raise GatewayResponseError(str(exc)) from exc

            reply_text = result.output if isinstance(result.output, str) else ""
            if not reply_text.strip():
                reply_text = EMPTY_REPLY_TEXT
            chunks = harvest_citation_chunks(result.new_messages())
            logfire.info(
                "assistant.reply",
                reply_length=len(reply_text),
                citation_chunks=len(chunks),
            )
            return GatewayReply(reply_text=reply_text, raw_citation_chunks=chunks)

    async def _run_with_retry(
        self, agent: Agent[GatewayRequest, str], request: GatewayRequest
    ) -> Any:
        """Execute the agent, retrying transient backend failures."""

        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self._settings.gateway_attempts),
            wait=wait_fixed(_RETRY_WAIT_SECONDS),
            retry=retry_if_exception_type(AgentRunError),
            reraise=True,
        ):
            with attempt:
                return await agent.run(request.user_text, deps=request)


__all__ = [
    "AssistantGateway",
    "GatewayError",
    "GatewayResponseError",
    "GatewayTimeout",
    "PydanticAIGateway",
    "TimeoutGateway",
    "harvest_citation_chunks",
]
