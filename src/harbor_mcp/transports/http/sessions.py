"""SSE session bookkeeping: one SseSession per open GET /sse stream."""

from __future__ import annotations

import logging
import uuid
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Iterator, Optional

import anyio
from mcp import types
from mcp.shared.message import SessionMessage
from pydantic import ValidationError
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response

from harbor_mcp.core.observability import log_event

from .config import NO_SESSION_MESSAGE, PARSE_ERROR_MESSAGE

log = logging.getLogger("harbor_mcp.transports.http.sessions")


class SessionClosedError(RuntimeError):
    """Raised when delivering to a session whose stream has gone away."""


class SseSession:
    """
    One SSE client connection.
    - inbound: messages POSTed by the client, read by the MCP server loop
    - outbound: messages written by the MCP server loop, streamed as SSE events
    - closed: fires exactly once, whatever ended the connection
    """

    def __init__(self, session_id: str):
        self.session_id = session_id
        self._inbound_writer, self.inbound = anyio.create_memory_object_stream(0)
        self.outbound_writer, self._outbound = anyio.create_memory_object_stream(0)
        self.closed = anyio.Event()

    @property
    def is_closed(self) -> bool:
        return self.closed.is_set()

    async def wait_closed(self) -> None:
        await self.closed.wait()

    async def deliver(self, message: SessionMessage | Exception) -> None:
        if self.is_closed:
            raise SessionClosedError(self.session_id)
        try:
            await self._inbound_writer.send(message)
        except (anyio.ClosedResourceError, anyio.BrokenResourceError) as exc:
            raise SessionClosedError(self.session_id) from exc

    async def outbound_messages(self) -> AsyncIterator[SessionMessage]:
        async for message in self._outbound:
            yield message

    async def handle_post_message(self, request: Request) -> Response:
        """Decode one POSTed JSON-RPC message and hand it to the server loop."""
        body = await request.body()
        try:
            message = types.JSONRPCMessage.model_validate_json(body)
        except ValidationError as exc:
            log_event(
                "message_unparseable",
                logger=log,
                level=logging.WARNING,
                session_id=self.session_id,
                status=400,
            )
            try:
                await self.deliver(exc)
            except SessionClosedError:
                return PlainTextResponse(NO_SESSION_MESSAGE, status_code=400)
            return PlainTextResponse(PARSE_ERROR_MESSAGE, status_code=400)

        try:
            await self.deliver(SessionMessage(message))
        except SessionClosedError:
            log_event(
                "message_rejected",
                logger=log,
                session_id=self.session_id,
                status=400,
            )
            return PlainTextResponse(NO_SESSION_MESSAGE, status_code=400)
        return PlainTextResponse("Accepted", status_code=202)

    def close(self) -> bool:
        """Close all streams and fire `closed`; returns True only on the first call."""
        if self.closed.is_set():
            return False
        self.closed.set()
        for stream in (
            self._inbound_writer,
            self.inbound,
            self.outbound_writer,
            self._outbound,
        ):
            stream.close()
        return True


class SessionRegistry:
    """
    Active SSE sessions keyed by id.
    Only touched from the event loop, so insert/lookup/delete need no lock.
    """

    def __init__(self) -> None:
        self._sessions: Dict[str, SseSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._sessions))

    def get(self, session_id: Optional[str]) -> Optional[SseSession]:
        """Return the live session for session_id, or None if missing/closed."""
        if not session_id:
            return None
        session = self._sessions.get(session_id)
        if session is None or session.is_closed:
            return None
        return session

    def register(self, session: SseSession) -> None:
        if session.session_id in self._sessions:
            raise ValueError(f"Duplicate session id: {session.session_id}")
        self._sessions[session.session_id] = session

    def remove(self, session_id: str) -> Optional[SseSession]:
        return self._sessions.pop(session_id, None)

    @asynccontextmanager
    async def open(self) -> AsyncIterator[SseSession]:
        """Register a fresh session for the lifetime of the block."""
        session = SseSession(uuid.uuid4().hex)
        self.register(session)
        log_event("sse_open", logger=log, session_id=session.session_id)
        try:
            yield session
        finally:
            self.remove(session.session_id)
            session.close()
            log_event("sse_close", logger=log, session_id=session.session_id)


__all__ = ["SseSession", "SessionRegistry", "SessionClosedError"]
