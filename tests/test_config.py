"""Tests for environment-driven settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from harmarket.config import get_settings


_ENV_KEYS = (
    "HARMARKET_MODEL_PROVIDER",
    "HARMARKET_MODEL",
    "HARMARKET_WEB_GROUNDING",
    "HARMARKET_REQUEST_TIMEOUT_SECONDS",
    "HARMARKET_GATEWAY_ATTEMPTS",
    "HARMARKET_CURRENCY",
    "HARMARKET_CONTEXT_MAX_ITEMS",
    "HARMARKET_TRANSCRIPT_PATH",
    "HARMARKET_SESSION_TTL_SECONDS",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults_need_no_environment() -> None:
    config = get_settings()

    assert config.model_provider == "google"
    assert config.web_grounding is True
    assert config.request_timeout_seconds == 30.0
    assert config.gateway_attempts == 2
    assert config.currency == "KES"
    assert config.context_max_items == 200
    assert config.transcript_path is None


def test_overrides_are_parsed(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("HARMARKET_MODEL_PROVIDER", "OpenAI")
    monkeypatch.setenv("HARMARKET_MODEL", "gpt-4.1-mini")
    monkeypatch.setenv("HARMARKET_WEB_GROUNDING", "off")
    monkeypatch.setenv("HARMARKET_REQUEST_TIMEOUT_SECONDS", "12.5")
    monkeypatch.setenv("HARMARKET_CURRENCY", "ugx")
    monkeypatch.setenv("HARMARKET_CONTEXT_MAX_ITEMS", "50")
    monkeypatch.setenv("HARMARKET_TRANSCRIPT_PATH", str(tmp_path / "chat.jsonl"))

    config = get_settings()

    assert config.model_provider == "openai"
    assert config.model_name == "gpt-4.1-mini"
    assert config.web_grounding is False
    assert config.request_timeout_seconds == 12.5
    assert config.currency == "UGX"
    assert config.context_max_items == 50
    assert config.transcript_path == (tmp_path / "chat.jsonl").resolve()


@pytest.mark.parametrize(
    "key, value",
    [
        ("HARMARKET_MODEL_PROVIDER", "anthropic-on-prem"),
        ("HARMARKET_WEB_GROUNDING", "sometimes"),
        ("HARMARKET_REQUEST_TIMEOUT_SECONDS", "-1"),
        ("HARMARKET_REQUEST_TIMEOUT_SECONDS", "soon"),
        ("HARMARKET_REQUEST_TIMEOUT_SECONDS", "nan"),
        ("HARMARKET_SESSION_TTL_SECONDS", "0"),
        ("HARMARKET_GATEWAY_ATTEMPTS", "0"),
        ("HARMARKET_CURRENCY", "KSH1"),
        ("HARMARKET_CONTEXT_MAX_ITEMS", "many"),
    ],
)
def test_invalid_values_raise(monkeypatch: pytest.MonkeyPatch, key: str, value: str) -> None:
    monkeypatch.setenv(key, value)

    with pytest.raises(RuntimeError, match=key):
        get_settings()
