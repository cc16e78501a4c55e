from __future__ import annotations

from dataclasses import dataclass

NO_SESSION_MESSAGE = "No SSE connection found for this session"
PARSE_ERROR_MESSAGE = "Could not parse message"
SESSION_ID_PARAM = "sessionId"


@dataclass(frozen=True)
class HttpConfig:
    """Minimal configuration for the SSE transport runner."""

    host: str = "0.0.0.0"
    port: int = 3000
    sse_path: str = "/sse"
    message_path: str = "/messages"
    sse_ping_s: int = 15
    debug: bool = False

    @property
    def uvicorn_log_level(self) -> str:
        return "debug" if self.debug else "info"


__all__ = [
    "HttpConfig",
    "NO_SESSION_MESSAGE",
    "PARSE_ERROR_MESSAGE",
    "SESSION_ID_PARAM",
]
