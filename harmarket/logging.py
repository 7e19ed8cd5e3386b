"""Logfire bootstrap and transcript logging utilities."""

from __future__ import annotations

import asyncio
import json
import os
from datetime import datetime, timezone
from pathlib import Path

import logfire
from pydantic import BaseModel


_LOGFIRE_READY = False


def _configure_logfire() -> None:
    """Configure Logfire instrumentation if it has not been configured yet."""

    token = os.getenv("LOGFIRE_API_KEY")
    if token:
        logfire.configure(token=token, service_name="harmarket-assistant")
    else:
        logfire.configure(
            send_to_logfire="if-token-present", service_name="harmarket-assistant"
        )


def _ensure_logfire() -> None:
    """Initialize Logfire once for the process."""

    global _LOGFIRE_READY
    if not _LOGFIRE_READY:
        _configure_logfire()
        _LOGFIRE_READY = True


class ConversationLogger:
    """JSON lines transcript of settled chat messages, one record per message."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.touch(exist_ok=True)
        self._write_lock = asyncio.Lock()

    async def record(self, session_id: str | None, message: BaseModel) -> None:
        """Append ``message`` tagged with its session and the write time."""

        line = json.dumps(
            {
                "session_id": session_id,
                **message.model_dump(mode="json"),
                "logged_at": datetime.now(tz=timezone.utc).isoformat(),
            },
            ensure_ascii=False,
        )
        async with self._write_lock:
            await asyncio.to_thread(self._write, line)

    def _write(self, line: str) -> None:
        with self.path.open("a", encoding="utf-8") as handle:
            print(line, file=handle)


__all__ = ["ConversationLogger", "_ensure_logfire"]
