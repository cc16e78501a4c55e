from __future__ import annotations

import asyncio
import logging
from typing import Optional, Sequence

from mcp import types
from mcp.server.lowlevel import Server

from harbor_mcp import __version__
from harbor_mcp.core.config import ConfigError, HarborConfig, load_config
from harbor_mcp.core.dispatcher import ToolDispatcher
from harbor_mcp.core.logging import setup_logging
from harbor_mcp.transports.http.config import HttpConfig
from harbor_mcp.transports.http.main import run_sse
from harbor_mcp.transports.stdio.main import run_stdio

SERVER_NAME = "mcp-harbor"

log = logging.getLogger("harbor_mcp.server")


def build_server(dispatcher: ToolDispatcher) -> Server:
    """Create the MCP server and wire tools/list and tools/call to the dispatcher."""
    server: Server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def _list_tools() -> list[types.Tool]:
        return dispatcher.list_tools()

    async def _call_tool(req: types.CallToolRequest) -> types.ServerResult:
        result = await dispatcher.call_tool(req.params.name, req.params.arguments)
        return types.ServerResult(result)

    # Registered without the call_tool() decorator, which folds every
    # exception into an isError result; McpError must reach the client as-is.
    server.request_handlers[types.CallToolRequest] = _call_tool
    return server


# --- Entry point ----------------------------------------------------------- #


async def serve(cfg: HarborConfig) -> None:
    async with cfg.create_client() as client:
        server = build_server(ToolDispatcher(client))
        if cfg.sse:
            log.info("Using SSE transport")
            await run_sse(server, HttpConfig(port=cfg.port, debug=cfg.debug))
        else:
            await run_stdio(server)


def main(argv: Optional[Sequence[str]] = None) -> None:
    try:
        cfg = load_config(argv)
    except ConfigError as exc:
        raise SystemExit(f"mcp-harbor: error: {exc}") from exc

    setup_logging(debug=cfg.debug)
    log.debug("Starting MCP Harbor server v%s", __version__)
    log.debug("Harbor URL: %s", cfg.url)
    log.debug("Auth type: %s", cfg.auth_type)
    log.debug("Username: %s", cfg.username)
    log.debug("Insecure mode: %s", cfg.insecure)
    log.debug("Transport: %s", cfg.transport)
    if cfg.insecure:
        log.debug("TLS certificate validation disabled")

    asyncio.run(serve(cfg))


if __name__ == "__main__":
    main()
