from __future__ import annotations

from typing import Any, Dict, Optional
from urllib.parse import quote

from harbor_mcp.core.client import HarborClient, encode_repository_name
from harbor_mcp.core.errors import invalid_params
from harbor_mcp.core.models import Repository
from harbor_mcp.core.tools._paging import (
    DEFAULT_PAGE_SIZE,
    check_page,
    clamp_page_size,
    page_envelope,
)


def _strip_project(project_name: str, repository_name: str) -> str:
    # Harbor reports repositories as "<project>/<repo>" but addresses them without it
    prefix = f"{project_name}/"
    if repository_name.startswith(prefix):
        return repository_name[len(prefix) :]
    return repository_name


def repository_path(project_name: str, repository_name: str) -> str:
    project_name = (project_name or "").strip()
    repository_name = (repository_name or "").strip()
    if not project_name:
        raise invalid_params("project_name must not be empty")
    if not repository_name:
        raise invalid_params("repository_name must not be empty")
    repo = encode_repository_name(_strip_project(project_name, repository_name))
    return f"/projects/{quote(project_name, safe='')}/repositories/{repo}"


async def list_repositories(
    client: HarborClient,
    project_name: str,
    *,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
    name: Optional[str] = None,
) -> Dict[str, Any]:
    """List repositories in a project, optionally fuzzy-filtered by name."""
    project_name = (project_name or "").strip()
    if not project_name:
        raise invalid_params("project_name must not be empty")
    page = check_page(page)
    page_size = clamp_page_size(page_size)

    params: Dict[str, Any] = {"page": page, "page_size": page_size}
    if name:
        params["q"] = f"name=~{name}"

    elements, total = await client.get_page(
        f"/projects/{quote(project_name, safe='')}/repositories",
        params=params,
        tool="list_repositories",
    )
    items = [
        Repository.model_validate(e).to_summary().model_dump() for e in elements
    ]
    return page_envelope(items, page=page, page_size=page_size, total=total)


async def get_repository(
    client: HarborClient, project_name: str, repository_name: str
) -> Dict[str, Any]:
    payload = await client.get(
        repository_path(project_name, repository_name), tool="get_repository"
    )
    repo = Repository.model_validate(payload)
    return {**repo.to_summary().model_dump(), "description": repo.description}


async def delete_repository(
    client: HarborClient, project_name: str, repository_name: str
) -> Dict[str, Any]:
    """Delete a repository together with all of its artifacts."""
    await client.delete(
        repository_path(project_name, repository_name), tool="delete_repository"
    )
    return {
        "status": "deleted",
        "project_name": project_name,
        "repository_name": repository_name,
    }
