from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from typing import Optional, Sequence

from dotenv import load_dotenv

from .client import HarborAuth, HarborClient

ENV_PREFIX = "HARBOR_"
DEFAULT_USERNAME = "admin"
DEFAULT_PORT = 3000


class ConfigError(ValueError):
    """Raised when startup arguments are missing or contradictory."""


def _get_bool_env(name: str, default: bool) -> bool:
    """Parse a boolean environment variable with a safe default."""
    raw = os.getenv(name)
    if raw is None:
        return default
    val = raw.strip().lower()
    if val in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if val in {"0", "false", "f", "no", "n", "off"}:
        return False
    return default


def _get_str_env(name: str, default: Optional[str] = None) -> Optional[str]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


def _get_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc


@dataclass(frozen=True)
class HarborConfig:
    """Process configuration; validated on construction."""

    url: str
    username: str = DEFAULT_USERNAME
    password: Optional[str] = None
    token: Optional[str] = None
    debug: bool = False
    sse: bool = False
    port: int = DEFAULT_PORT
    insecure: bool = False

    def __post_init__(self) -> None:
        if not (self.url or "").strip():
            raise ConfigError("A Harbor URL must be provided (--url or HARBOR_URL)")
        if not (self.username or "").strip():
            raise ConfigError("username must not be empty")
        if not self.password and not self.token:
            raise ConfigError("Either --password or --token must be provided")
        if self.password and self.token:
            raise ConfigError("--password and --token are mutually exclusive")
        if not 0 < self.port < 65536:
            raise ConfigError(f"port must be between 1 and 65535, got {self.port}")

    @property
    def auth_type(self) -> str:
        return "token" if self.token else "password"

    @property
    def auth(self) -> HarborAuth:
        if self.token:
            return HarborAuth(kind="token", username=self.username, secret=self.token)
        return HarborAuth(
            kind="password", username=self.username, secret=self.password or ""
        )

    @property
    def transport(self) -> str:
        return "sse" if self.sse else "stdio"

    def create_client(self, **kwargs) -> HarborClient:
        """Create a HarborClient bound to this configuration."""
        return HarborClient(
            base_url=self.url, auth=self.auth, verify=not self.insecure, **kwargs
        )


def build_parser() -> argparse.ArgumentParser:
    """Create the CLI parser; every flag falls back to its HARBOR_* variable."""
    parser = argparse.ArgumentParser(
        prog="mcp-harbor",
        description="Expose a Harbor registry as MCP tools over stdio or SSE.",
    )
    parser.add_argument(
        "--url",
        default=_get_str_env(ENV_PREFIX + "URL"),
        help="Harbor API URL",
    )
    parser.add_argument(
        "--username",
        default=_get_str_env(ENV_PREFIX + "USERNAME", DEFAULT_USERNAME),
        help="Harbor username (or robot account name)",
    )
    parser.add_argument(
        "--password",
        default=_get_str_env(ENV_PREFIX + "PASSWORD"),
        help="Harbor password (mutually exclusive with --token)",
    )
    parser.add_argument(
        "--token",
        default=_get_str_env(ENV_PREFIX + "TOKEN"),
        help="Robot account secret (mutually exclusive with --password)",
    )
    parser.add_argument(
        "--debug",
        action=argparse.BooleanOptionalAction,
        default=_get_bool_env(ENV_PREFIX + "DEBUG", False),
        help="Enable debug logging",
    )
    parser.add_argument(
        "--sse",
        action=argparse.BooleanOptionalAction,
        default=_get_bool_env(ENV_PREFIX + "SSE", False),
        help="Serve over HTTP+SSE instead of stdio",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=_get_int_env(ENV_PREFIX + "PORT", DEFAULT_PORT),
        help="Port for the SSE transport",
    )
    parser.add_argument(
        "--insecure",
        action=argparse.BooleanOptionalAction,
        default=_get_bool_env(ENV_PREFIX + "INSECURE", False),
        help="Disable TLS certificate validation",
    )
    return parser


def load_config(
    argv: Optional[Sequence[str]] = None, *, use_dotenv: bool = True
) -> HarborConfig:
    """Parse CLI arguments (with env/.env fallbacks) into a validated HarborConfig."""
    if use_dotenv:
        load_dotenv()
    args = build_parser().parse_args(argv)
    return HarborConfig(
        url=args.url or "",
        username=args.username,
        password=args.password,
        token=args.token,
        debug=args.debug,
        sse=args.sse,
        port=args.port,
        insecure=args.insecure,
    )


__all__ = ["ConfigError", "HarborConfig", "build_parser", "load_config"]
