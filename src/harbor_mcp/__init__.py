"""harbor_mcp package exports."""

__version__ = "0.1.0"

from .core import (  # noqa: E402
    TOOL_CATALOG,
    ConfigError,
    HarborAuth,
    HarborClient,
    HarborClientError,
    HarborConfig,
    HarborHTTPError,
    HarborParseError,
    ToolDispatcher,
    load_config,
)
from .server import build_server, main as run_server  # noqa: E402

__all__ = [
    "__version__",
    # Client
    "HarborAuth",
    "HarborClient",
    # Exceptions
    "HarborClientError",
    "HarborHTTPError",
    "HarborParseError",
    "ConfigError",
    # Config
    "HarborConfig",
    "load_config",
    # Server utilities
    "TOOL_CATALOG",
    "ToolDispatcher",
    "build_server",
    "run_server",
]
