"""Core domain surface for mcp-harbor (transport-agnostic)."""

from .catalog import TOOL_CATALOG, ToolSpec, list_tools
from .client import (
    HarborAuth,
    HarborClient,
    HarborClientError,
    HarborHTTPError,
    HarborModelValidationError,
    HarborParseError,
)
from .config import ConfigError, HarborConfig, build_parser, load_config
from .dispatcher import ToolDispatcher, to_tool_result
from .errors import as_protocol_error

__all__ = [
    # Client
    "HarborAuth",
    "HarborClient",
    # Exceptions
    "HarborClientError",
    "HarborHTTPError",
    "HarborParseError",
    "HarborModelValidationError",
    "ConfigError",
    "as_protocol_error",
    # Config
    "HarborConfig",
    "build_parser",
    "load_config",
    # Catalog / dispatch
    "TOOL_CATALOG",
    "ToolSpec",
    "list_tools",
    "ToolDispatcher",
    "to_tool_result",
]
