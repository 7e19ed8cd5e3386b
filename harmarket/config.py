"""Configuration helpers for the marketplace assistant engine."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, TypeVar

from dotenv import load_dotenv

# Load .env if present to simplify local development.
load_dotenv()


_SUPPORTED_PROVIDERS = ("google", "openai")
_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}

_Number = TypeVar("_Number", int, float)


@dataclass(frozen=True)
class Settings:
    """Holds configuration derived from environment variables."""

    model_provider: str
    model_name: str
    google_api_key: str | None
    openai_api_key: str | None
    openai_base_url: str | None
    web_grounding: bool
    request_timeout_seconds: float
    gateway_attempts: int
    currency: str
    context_max_items: int
    transcript_path: Path | None
    session_ttl_seconds: float


def _positive_from_env(
    key: str, default: _Number, parse: Callable[[str], _Number]
) -> _Number:
    """Parse a value greater than zero with ``parse`` (``int`` or ``float``)."""

    raw_value = os.getenv(key)
    if raw_value is None:
        return default

    try:
        value = parse(raw_value.strip())
    except ValueError as exc:
        kind = "an integer" if parse is int else "a number"
        raise RuntimeError(f"Environment variable '{key}' must be {kind}") from exc

    if not value > 0:
        raise RuntimeError(f"Environment variable '{key}' must be greater than zero")
    return value


def _bool_from_env(key: str, default: bool) -> bool:
    """Parse a boolean flag such as ``true``/``false`` from the environment."""

    raw_value = os.getenv(key)
    if raw_value is None:
        return default

    normalized = raw_value.strip().lower()
    if normalized in _TRUTHY:
        return True
    if normalized in _FALSY:
        return False
    raise RuntimeError(f"Environment variable '{key}' must be a boolean flag")


def _provider_from_env() -> str:
    provider = os.getenv("HARMARKET_MODEL_PROVIDER", "google").strip().lower()
    if provider not in _SUPPORTED_PROVIDERS:
        raise RuntimeError(
            "Environment variable 'HARMARKET_MODEL_PROVIDER' must be one of "
            + ", ".join(_SUPPORTED_PROVIDERS)
        )
    return provider


def _currency_from_env() -> str:
    currency = os.getenv("HARMARKET_CURRENCY", "KES").strip().upper()
    if len(currency) != 3 or not currency.isalpha():
        raise RuntimeError(
            "Environment variable 'HARMARKET_CURRENCY' must be a 3-letter currency code"
        )
    return currency


def get_settings() -> Settings:
    """Create settings populated from the environment."""

    transcript_raw = os.getenv("HARMARKET_TRANSCRIPT_PATH")
    transcript_path = (
        Path(transcript_raw).expanduser().resolve() if transcript_raw else None
    )

    return Settings(
        model_provider=_provider_from_env(),
        model_name=os.getenv("HARMARKET_MODEL", "gemini-2.5-flash"),
        google_api_key=os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY"),
        openai_api_key=os.getenv("OPENAI_API_KEY"),
        openai_base_url=os.getenv("OPENAI_BASE_URL"),
        web_grounding=_bool_from_env("HARMARKET_WEB_GROUNDING", True),
        request_timeout_seconds=_positive_from_env(
            "HARMARKET_REQUEST_TIMEOUT_SECONDS", 30.0, float
        ),
        gateway_attempts=_positive_from_env("HARMARKET_GATEWAY_ATTEMPTS", 2, int),
        currency=_currency_from_env(),
        context_max_items=_positive_from_env("HARMARKET_CONTEXT_MAX_ITEMS", 200, int),
        transcript_path=transcript_path,
        session_ttl_seconds=_positive_from_env(
            "HARMARKET_SESSION_TTL_SECONDS", 1800.0, float
        ),
    )


settings = get_settings()


__all__ = ["Settings", "get_settings", "settings"]
