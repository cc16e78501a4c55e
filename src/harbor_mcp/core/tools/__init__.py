"""
Tool namespace for the Harbor MCP server.

Every coroutine here takes the HarborClient as its first argument and is
exposed through harbor_mcp.core.catalog.
"""

from .artifacts import (
    create_tag,
    delete_artifact,
    delete_tag,
    get_artifact,
    list_artifacts,
    list_tags,
)
from .projects import create_project, delete_project, get_project, list_projects
from .repositories import delete_repository, get_repository, list_repositories
from .system import check_health, get_system_info

__all__ = [
    "list_projects",
    "get_project",
    "create_project",
    "delete_project",
    "list_repositories",
    "get_repository",
    "delete_repository",
    "list_artifacts",
    "get_artifact",
    "delete_artifact",
    "list_tags",
    "create_tag",
    "delete_tag",
    "get_system_info",
    "check_health",
]
