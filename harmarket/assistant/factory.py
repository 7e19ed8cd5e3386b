"""Factory for constructing the marketplace assistant agent."""

from __future__ import annotations

from functools import lru_cache

from pydantic_ai import Agent, InstrumentationSettings, RunContext
from pydantic_ai.builtin_tools import WebSearchTool
from pydantic_ai.models import Model
from pydantic_ai.models.google import GoogleModel, GoogleModelSettings
from pydantic_ai.models.openai import OpenAIResponsesModel, OpenAIResponsesModelSettings
from pydantic_ai.providers.google import GoogleProvider
from pydantic_ai.providers.openai import OpenAIProvider

from ..config import Settings
from ..logging import _ensure_logfire
from .schemas import GatewayRequest


def build_model(settings: Settings) -> Model:
    """Return the configured Gemini or OpenAI model."""

    if settings.model_provider == "openai":
        return OpenAIResponsesModel(
            settings.model_name,
            provider=OpenAIProvider(
                base_url=settings.openai_base_url, api_key=settings.openai_api_key
            ),
            settings=OpenAIResponsesModelSettings(temperature=0.7),
        )

    return GoogleModel(
        settings.model_name,
        provider=GoogleProvider(api_key=settings.google_api_key),
        settings=GoogleModelSettings(temperature=0.7),
    )


def build_agent(model: Model | str, *, web_grounding: bool) -> Agent[GatewayRequest, str]:
    """Return an agent whose instructions come from each gateway request."""

    agent = Agent(
        model=model,
        output_type=str,
        deps_type=GatewayRequest,
        builtin_tools=[WebSearchTool()] if web_grounding else [],
        instrument=InstrumentationSettings(),
        name="marketplace-assistant",
    )

    @agent.instructions
    def _request_instructions(ctx: RunContext[GatewayRequest]) -> str:
        return ctx.deps.system_instruction

    return agent


@lru_cache(maxsize=4)
def get_agent(settings: Settings, web_grounding: bool) -> Agent[GatewayRequest, str]:
    """Return a cached agent for the settings and grounding combination."""

    _ensure_logfire()
    return build_agent(build_model(settings), web_grounding=web_grounding)


__all__ = ["build_agent", "build_model", "get_agent"]
