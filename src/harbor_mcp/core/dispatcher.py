from __future__ import annotations

import json
import logging
import time
from typing import Any, List, Mapping, Optional

from mcp import types
from mcp.shared.exceptions import McpError

from .catalog import TOOL_CATALOG, ToolSpec
from .client import HarborClient
from .errors import as_protocol_error, unknown_tool
from .observability import log_event

log = logging.getLogger("harbor_mcp.dispatcher")


def to_tool_result(payload: Any) -> types.CallToolResult:
    """Wrap a JSON-serializable tool return value in the MCP success envelope."""
    text = json.dumps(payload, indent=2, default=str)
    return types.CallToolResult(content=[types.TextContent(type="text", text=text)])


class ToolDispatcher:
    """
    Routes tool calls by name to catalog handlers.
    - Unknown names raise METHOD_NOT_FOUND
    - McpError raised by a handler passes through unchanged
    - Any other exception becomes INTERNAL_ERROR carrying its message
    """

    def __init__(
        self,
        client: HarborClient,
        catalog: Mapping[str, ToolSpec] = TOOL_CATALOG,
    ):
        self.client = client
        self.catalog = catalog

    def list_tools(self) -> List[types.Tool]:
        return [spec.to_tool() for spec in self.catalog.values()]

    async def call_tool(
        self, name: str, arguments: Optional[Mapping[str, Any]] = None
    ) -> types.CallToolResult:
        start = time.perf_counter()
        try:
            spec = self.catalog.get(name)
            if spec is None:
                raise unknown_tool(name)
            bound = spec.bind(self.client, arguments or {})
            result = await spec.handler(*bound.args, **bound.kwargs)
        except Exception as exc:
            error = as_protocol_error(exc)
            log.error("Tool %s failed: %s", name, error.error.message)
            log.debug("Tool %s failure detail", name, exc_info=exc)
            log_event(
                "tool_call",
                logger=log,
                tool=name,
                status=error.error.code,
                error_type=type(exc).__name__,
                duration_ms=int((time.perf_counter() - start) * 1000),
            )
            if isinstance(exc, McpError):
                raise
            raise error from exc

        log_event(
            "tool_call",
            logger=log,
            tool=name,
            status="ok",
            duration_ms=int((time.perf_counter() - start) * 1000),
        )
        return to_tool_result(result)


__all__ = ["ToolDispatcher", "to_tool_result"]
