from __future__ import annotations

import logging

from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

log = logging.getLogger("harbor_mcp.transports.stdio")


async def run_stdio(server: Server) -> None:
    """Serve one peer over stdin/stdout until the input stream ends."""
    async with stdio_server() as (read_stream, write_stream):
        log.info("Serving MCP over stdio")
        await server.run(
            read_stream, write_stream, server.create_initialization_options()
        )
    log.info("stdio stream closed")
