from __future__ import annotations

import logging

import uvicorn
from mcp.server.lowlevel import Server

from .app import build_sse_app
from .config import HttpConfig

log = logging.getLogger("harbor_mcp.transports.http")


async def run_sse(server: Server, cfg: HttpConfig | None = None) -> None:
    """Serve the SSE app with uvicorn until shutdown."""
    cfg = cfg or HttpConfig()
    app = build_sse_app(server, cfg)
    # log_config=None keeps uvicorn on the root logfmt handler
    config = uvicorn.Config(
        app,
        host=cfg.host,
        port=cfg.port,
        log_level=cfg.uvicorn_log_level,
        log_config=None,
    )
    log.info("SSE server running on port %s", cfg.port)
    await uvicorn.Server(config).serve()
