from __future__ import annotations

import logging
from typing import Any, AsyncIterator, Dict

import anyio
from mcp.server.lowlevel import Server
from sse_starlette.sse import EventSourceResponse
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse, Response
from starlette.routing import Route
from starlette.types import Receive, Scope, Send

from harbor_mcp.core.observability import log_event

from .config import NO_SESSION_MESSAGE, SESSION_ID_PARAM, HttpConfig
from .sessions import SessionRegistry, SseSession

log = logging.getLogger(__name__)


class SseEndpoint:
    """
    ASGI endpoint for GET /sse.
    Each connection gets its own session and its own MCP server loop; the
    session is deregistered when the event stream ends for any reason.
    """

    def __init__(self, server: Server, registry: SessionRegistry, cfg: HttpConfig):
        self.server = server
        self.registry = registry
        self.cfg = cfg

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        async with self.registry.open() as session:
            endpoint = (
                f"{scope.get('root_path', '')}{self.cfg.message_path}"
                f"?{SESSION_ID_PARAM}={session.session_id}"
            )
            async with anyio.create_task_group() as tg:
                tg.start_soon(self._run_server, session)
                response = EventSourceResponse(
                    self._events(session, endpoint), ping=self.cfg.sse_ping_s
                )
                await response(scope, receive, send)
                # Stream is gone (disconnect or server loop exit); stop the loop
                tg.cancel_scope.cancel()

    async def _events(
        self, session: SseSession, endpoint: str
    ) -> AsyncIterator[Dict[str, Any]]:
        yield {"event": "endpoint", "data": endpoint}
        async for message in session.outbound_messages():
            yield {
                "event": "message",
                "data": message.message.model_dump_json(
                    by_alias=True, exclude_none=True
                ),
            }

    async def _run_server(self, session: SseSession) -> None:
        try:
            await self.server.run(
                session.inbound,
                session.outbound_writer,
                self.server.create_initialization_options(),
            )
        except Exception:
            log.exception(
                "MCP server loop failed", extra={"session_id": session.session_id}
            )
        finally:
            session.outbound_writer.close()


def build_sse_app(
    server: Server,
    cfg: HttpConfig | None = None,
    registry: SessionRegistry | None = None,
) -> Starlette:
    """Return a Starlette app serving GET /sse, POST /messages and GET /healthz."""
    cfg = cfg or HttpConfig()
    sessions = registry if registry is not None else SessionRegistry()

    async def handle_post_message(request: Request) -> Response:
        session_id = request.query_params.get(SESSION_ID_PARAM)
        session = sessions.get(session_id)
        if session is None:
            log_event(
                "message_rejected",
                logger=log,
                session_id=session_id,
                method="POST",
                path=request.url.path,
                status=400,
            )
            return PlainTextResponse(NO_SESSION_MESSAGE, status_code=400)
        return await session.handle_post_message(request)

    async def healthz(_request: Request) -> Response:
        return JSONResponse(
            {"status": "ok", "sessions": len(sessions)},
            headers={"Cache-Control": "no-store"},
        )

    app = Starlette(
        routes=[
            Route(
                cfg.sse_path,
                endpoint=SseEndpoint(server, sessions, cfg),
                methods=["GET"],
            ),
            Route(cfg.message_path, handle_post_message, methods=["POST"]),
            Route("/healthz", healthz, methods=["GET"]),
        ]
    )
    app.state.sessions = sessions
    return app


__all__ = ["SseEndpoint", "build_sse_app"]
