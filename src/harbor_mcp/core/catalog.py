"""Static tool catalog: tool name -> description, input schema and handler."""

from __future__ import annotations

import copy
import inspect
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Mapping, Sequence

from mcp import types

from . import tools
from .errors import invalid_params

ToolHandler = Callable[..., Awaitable[Any]]


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    input_schema: Mapping[str, Any]
    handler: ToolHandler

    def to_tool(self) -> types.Tool:
        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=copy.deepcopy(dict(self.input_schema)),
        )

    def bind(self, client: Any, arguments: Mapping[str, Any]) -> inspect.BoundArguments:
        """Bind call arguments to the handler; mismatches are INVALID_PARAMS."""
        try:
            return inspect.signature(self.handler).bind(client, **dict(arguments))
        except TypeError as exc:
            raise invalid_params(f"Invalid arguments for {self.name}: {exc}") from exc


def _schema(
    properties: Dict[str, Dict[str, Any]], required: Sequence[str] = ()
) -> Dict[str, Any]:
    schema: Dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = list(required)
    return schema


_PAGE = {"type": "integer", "minimum": 1, "default": 1, "description": "Page number"}
_PAGE_SIZE = {
    "type": "integer",
    "minimum": 1,
    "maximum": 100,
    "default": 10,
    "description": "Items per page",
}
_PROJECT_REF = {"type": "string", "description": "Project name or numeric ID"}
_PROJECT_NAME = {"type": "string", "description": "Project name"}
_REPOSITORY_NAME = {
    "type": "string",
    "description": "Repository name without the project prefix (may contain '/')",
}
_REFERENCE = {
    "type": "string",
    "description": "Artifact digest (sha256:...) or tag",
}
_TAG_NAME = {"type": "string", "description": "Tag name"}


def _spec(handler: ToolHandler, description: str, schema: Dict[str, Any]) -> ToolSpec:
    return ToolSpec(
        name=handler.__name__,
        description=description,
        input_schema=MappingProxyType(schema),
        handler=handler,
    )


def _build(specs: Iterable[ToolSpec]) -> Mapping[str, ToolSpec]:
    table: Dict[str, ToolSpec] = {}
    for spec in specs:
        if spec.name in table:
            raise ValueError(f"Duplicate tool name detected: {spec.name}")
        table[spec.name] = spec
    return MappingProxyType(table)


TOOL_CATALOG: Mapping[str, ToolSpec] = _build(
    [
        _spec(
            tools.list_projects,
            "List projects in Harbor",
            _schema(
                {
                    "page": _PAGE,
                    "page_size": _PAGE_SIZE,
                    "name": {"type": "string", "description": "Fuzzy name filter"},
                    "public": {
                        "type": "boolean",
                        "description": "Only public (true) or private (false) projects",
                    },
                }
            ),
        ),
        _spec(
            tools.get_project,
            "Get project details from Harbor",
            _schema({"project": _PROJECT_REF}, ["project"]),
        ),
        _spec(
            tools.create_project,
            "Create a new project in Harbor",
            _schema(
                {
                    "project_name": _PROJECT_NAME,
                    "public": {
                        "type": "boolean",
                        "default": False,
                        "description": "Whether the project is publicly readable",
                    },
                    "storage_limit": {
                        "type": "integer",
                        "description": "Storage quota in bytes (-1 for unlimited)",
                    },
                },
                ["project_name"],
            ),
        ),
        _spec(
            tools.delete_project,
            "Delete a project from Harbor",
            _schema({"project": _PROJECT_REF}, ["project"]),
        ),
        _spec(
            tools.list_repositories,
            "List repositories in a project",
            _schema(
                {
                    "project_name": _PROJECT_NAME,
                    "page": _PAGE,
                    "page_size": _PAGE_SIZE,
                    "name": {"type": "string", "description": "Fuzzy name filter"},
                },
                ["project_name"],
            ),
        ),
        _spec(
            tools.get_repository,
            "Get repository details",
            _schema(
                {"project_name": _PROJECT_NAME, "repository_name": _REPOSITORY_NAME},
                ["project_name", "repository_name"],
            ),
        ),
        _spec(
            tools.delete_repository,
            "Delete a repository and all of its artifacts",
            _schema(
                {"project_name": _PROJECT_NAME, "repository_name": _REPOSITORY_NAME},
                ["project_name", "repository_name"],
            ),
        ),
        _spec(
            tools.list_artifacts,
            "List artifacts (images, charts, ...) in a repository",
            _schema(
                {
                    "project_name": _PROJECT_NAME,
                    "repository_name": _REPOSITORY_NAME,
                    "page": _PAGE,
                    "page_size": _PAGE_SIZE,
                    "with_tag": {
                        "type": "boolean",
                        "default": True,
                        "description": "Include tag names",
                    },
                },
                ["project_name", "repository_name"],
            ),
        ),
        _spec(
            tools.get_artifact,
            "Get artifact details by digest or tag",
            _schema(
                {
                    "project_name": _PROJECT_NAME,
                    "repository_name": _REPOSITORY_NAME,
                    "reference": _REFERENCE,
                },
                ["project_name", "repository_name", "reference"],
            ),
        ),
        _spec(
            tools.delete_artifact,
            "Delete an artifact by digest or tag",
            _schema(
                {
                    "project_name": _PROJECT_NAME,
                    "repository_name": _REPOSITORY_NAME,
                    "reference": _REFERENCE,
                },
                ["project_name", "repository_name", "reference"],
            ),
        ),
        _spec(
            tools.list_tags,
            "List tags of an artifact",
            _schema(
                {
                    "project_name": _PROJECT_NAME,
                    "repository_name": _REPOSITORY_NAME,
                    "reference": _REFERENCE,
                },
                ["project_name", "repository_name", "reference"],
            ),
        ),
        _spec(
            tools.create_tag,
            "Add a tag to an artifact",
            _schema(
                {
                    "project_name": _PROJECT_NAME,
                    "repository_name": _REPOSITORY_NAME,
                    "reference": _REFERENCE,
                    "tag_name": _TAG_NAME,
                },
                ["project_name", "repository_name", "reference", "tag_name"],
            ),
        ),
        _spec(
            tools.delete_tag,
            "Remove a tag from an artifact",
            _schema(
                {
                    "project_name": _PROJECT_NAME,
                    "repository_name": _REPOSITORY_NAME,
                    "reference": _REFERENCE,
                    "tag_name": _TAG_NAME,
                },
                ["project_name", "repository_name", "reference", "tag_name"],
            ),
        ),
        _spec(
            tools.get_system_info,
            "Get Harbor version and system information",
            _schema({}),
        ),
        _spec(
            tools.check_health,
            "Check the health of Harbor components",
            _schema({}),
        ),
    ]
)


def list_tools(catalog: Mapping[str, ToolSpec] = TOOL_CATALOG) -> List[types.Tool]:
    return [spec.to_tool() for spec in catalog.values()]


__all__ = ["ToolSpec", "ToolHandler", "TOOL_CATALOG", "list_tools"]
