from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND, ErrorData

from .client import (
    HarborClientError,
    HarborHTTPError,
    HarborModelValidationError,
    HarborParseError,
)
from .config import ConfigError


def protocol_error(code: int, message: str) -> McpError:
    return McpError(ErrorData(code=code, message=message))


def unknown_tool(name: str) -> McpError:
    return protocol_error(METHOD_NOT_FOUND, f"Unknown tool: {name}")


def invalid_params(message: str) -> McpError:
    return protocol_error(INVALID_PARAMS, message)


def as_protocol_error(exc: BaseException) -> McpError:
    """
    Classify an arbitrary failure for the client.
    McpError passes through untouched; anything else becomes INTERNAL_ERROR
    carrying only the exception message.
    """
    if isinstance(exc, McpError):
        return exc
    return protocol_error(INTERNAL_ERROR, str(exc) or type(exc).__name__)


__all__ = [
    "ConfigError",
    "HarborClientError",
    "HarborHTTPError",
    "HarborParseError",
    "HarborModelValidationError",
    "McpError",
    "protocol_error",
    "unknown_tool",
    "invalid_params",
    "as_protocol_error",
]
