"""Tests for the pydantic-ai backed assistant gateway."""

from __future__ import annotations

import asyncio
from dataclasses import replace

import pytest
from pydantic_ai.exceptions import ModelHTTPError, UserError
from pydantic_ai.messages import (
    BuiltinToolReturnPart,
    ModelMessage,
    ModelRequest,
    ModelResponse,
    TextPart,
    UserPromptPart,
)
from pydantic_ai.models.function import AgentInfo, FunctionModel
from pydantic_ai.models.test import TestModel

from harmarket.assistant import (
    GatewayReply,
    GatewayRequest,
    GatewayResponseError,
    GatewayTimeout,
    PydanticAIGateway,
    TimeoutGateway,
    build_agent,
    harvest_citation_chunks,
    render_system_instruction,
)
from harmarket.config import settings


@pytest.fixture
def anyio_backend() -> str:
    """Limit AnyIO tests to the asyncio backend."""

    return "asyncio"


def _request(**overrides: object) -> GatewayRequest:
    inventory = "[ID: p1] Bike - KES 12000 in Town"
    payload = {
        "user_text": "Any bikes?",
        "inventory_context": inventory,
        "system_instruction": render_system_instruction(inventory),
        "enable_web_grounding": False,
    }
    payload.update(overrides)
    return GatewayRequest(**payload)


@pytest.mark.anyio("asyncio")
async def test_gateway_returns_agent_text() -> None:
    agent = build_agent(
        TestModel(custom_output_text="The **Bike** [ID: p1] is solid"),
        web_grounding=False,
    )
    gateway = PydanticAIGateway(settings, agent_factory=lambda grounding: agent)

    reply = await gateway.generate(_request())

    assert reply.reply_text == "The **Bike** [ID: p1] is solid"
    assert reply.raw_citation_chunks == []


@pytest.mark.anyio("asyncio")
async def test_gateway_sends_request_instructions_and_user_text() -> None:
    seen: dict[str, object] = {}

    def _respond(messages: list[ModelMessage], info: AgentInfo) -> ModelResponse:
        request = messages[-1]
        assert isinstance(request, ModelRequest)
        seen["instructions"] = request.instructions
        seen["prompt"] = [
            part.content for part in request.parts if isinstance(part, UserPromptPart)
        ]
        return ModelResponse(parts=[TextPart("ok")])

    agent = build_agent(FunctionModel(_respond), web_grounding=False)
    gateway = PydanticAIGateway(settings, agent_factory=lambda grounding: agent)
    request = _request()

    await gateway.generate(request)

    assert seen["prompt"] == ["Any bikes?"]
    assert "[ID: p1] Bike - KES 12000 in Town" in str(seen["instructions"])
    assert "[ID: product-id]" in str(seen["instructions"])


@pytest.mark.anyio("asyncio")
async def test_gateway_selects_agent_by_grounding_flag() -> None:
    requested: list[bool] = []
    agent = build_agent(TestModel(custom_output_text="hi"), web_grounding=False)

    def _factory(grounding: bool):
        requested.append(grounding)
        return agent

    gateway = PydanticAIGateway(settings, agent_factory=_factory)

    await gateway.generate(_request(enable_web_grounding=True))
    await gateway.generate(_request(enable_web_grounding=False))

    assert requested == [True, False]


@pytest.mark.anyio("asyncio")
async def test_backend_errors_are_retried_then_wrapped() -> None:
    calls = 0

    def _fail(messages: list[ModelMessage], info: AgentInfo) -> ModelResponse:
        nonlocal calls
        calls += 1
        raise ModelHTTPError(status_code=503, model_name="test-model")

    agent = build_agent(FunctionModel(_fail), web_grounding=False)
    gateway = PydanticAIGateway(
        replace(settings, gateway_attempts=2), agent_factory=lambda grounding: agent
    )

    with pytest.raises(GatewayResponseError):
        await gateway.generate(_request())

    assert calls == 2


@pytest.mark.anyio("asyncio")
async def test_misconfigured_backend_is_a_gateway_error() -> None:
    def _factory(grounding: bool):
        raise UserError("Set the `GOOGLE_API_KEY` environment variable")

    gateway = PydanticAIGateway(settings, agent_factory=_factory)

    with pytest.raises(GatewayResponseError):
        await gateway.generate(_request())


@pytest.mark.anyio("asyncio")
async def test_timeout_gateway_raises_gateway_timeout() -> None:
    class _Slow:
        async def generate(self, request: GatewayRequest) -> GatewayReply:
            await asyncio.sleep(0.5)
            return GatewayReply(reply_text="late")

    gateway = TimeoutGateway(_Slow(), timeout_seconds=0.01)

    with pytest.raises(GatewayTimeout):
        await gateway.generate(_request())


@pytest.mark.anyio("asyncio")
async def test_timeout_gateway_passes_fast_replies_through() -> None:
    class _Fast:
        async def generate(self, request: GatewayRequest) -> GatewayReply:
            return GatewayReply(reply_text="quick")

    reply = await TimeoutGateway(_Fast(), timeout_seconds=1.0).generate(_request())

    assert reply.reply_text == "quick"


def test_harvest_collects_web_search_results() -> None:
    messages: list[ModelMessage] = [
        ModelRequest(parts=[UserPromptPart(content="phone prices")]),
        ModelResponse(
            parts=[
                BuiltinToolReturnPart(
                    tool_name="web_search",
                    content=[
                        {"uri": "https://a.example", "title": "A"},
                        {"web": {"uri": "https://b.example"}},
                        "not-a-chunk",
                    ],
                    tool_call_id="call-1",
                ),
                BuiltinToolReturnPart(
                    tool_name="code_execution",
                    content=[{"uri": "https://ignored.example"}],
                    tool_call_id="call-2",
                ),
                TextPart(content="Phones start at KES 8,000"),
            ]
        ),
    ]

    assert harvest_citation_chunks(messages) == [
        {"web": {"uri": "https://a.example", "title": "A"}},
        {"web": {"uri": "https://b.example"}},
    ]


def test_harvest_unwraps_source_lists() -> None:
    messages: list[ModelMessage] = [
        ModelResponse(
            parts=[
                BuiltinToolReturnPart(
                    tool_name="web_search",
                    content={"status": "completed", "sources": [{"uri": "https://c.example"}]},
                    tool_call_id="call-3",
                )
            ]
        )
    ]

    assert harvest_citation_chunks(messages) == [{"web": {"uri": "https://c.example"}}]


def test_system_instruction_embeds_inventory_and_marker_rules() -> None:
    instruction = render_system_instruction("No items currently listed in the store.")

    assert "CURRENT MARKET INVENTORY:\nNo items currently listed in the store." in instruction
    assert "[ID: product-id]" in instruction
    assert "**KES 1,200**" in instruction
