#!/usr/bin/env python3
"""
Fail if harbor_mcp.core reaches into a transport.
core/ must stay importable without starlette, uvicorn or the MCP server runtime.
"""

from __future__ import annotations

import ast
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
CORE_DIR = REPO_ROOT / "src" / "harbor_mcp" / "core"

FORBIDDEN_PREFIXES = (
    "starlette",
    "sse_starlette",
    "uvicorn",
    "mcp.server",
    "harbor_mcp.server",
    "harbor_mcp.transports",
)


def is_forbidden(module: str) -> bool:
    return any(
        module == prefix or module.startswith(prefix + ".")
        for prefix in FORBIDDEN_PREFIXES
    )


def _imported_modules(node: ast.AST) -> list[str]:
    if isinstance(node, ast.Import):
        return [alias.name for alias in node.names]
    if isinstance(node, ast.ImportFrom) and node.level == 0 and node.module:
        return [node.module]
    return []


def scan_file(path: Path) -> list[str]:
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    return [
        f"{path.relative_to(REPO_ROOT)}:{node.lineno}: forbidden import '{mod}'"
        for node in ast.walk(tree)
        for mod in _imported_modules(node)
        if is_forbidden(mod)
    ]


def main() -> int:
    violations: list[str] = []
    for py_file in sorted(CORE_DIR.rglob("*.py")):
        violations.extend(scan_file(py_file))

    for v in violations:
        print(v, file=sys.stderr)
    return 1 if violations else 0


if __name__ == "__main__":
    sys.exit(main())
