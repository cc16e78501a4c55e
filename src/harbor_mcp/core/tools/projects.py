from __future__ import annotations

from typing import Any, Dict, Optional

from harbor_mcp.core.client import RESOURCE_NAME_HEADER, HarborClient
from harbor_mcp.core.errors import invalid_params
from harbor_mcp.core.models import Project
from harbor_mcp.core.tools._paging import (
    DEFAULT_PAGE_SIZE,
    check_page,
    clamp_page_size,
    page_envelope,
)


def project_path(project: int | str) -> tuple[str, Dict[str, str]]:
    """Return (path, headers) addressing a project by numeric id or by name."""
    ref = str(project).strip()
    if not ref:
        raise invalid_params("project must not be empty")
    if ref.isdigit():
        return f"/projects/{ref}", {}
    return f"/projects/{ref}", {RESOURCE_NAME_HEADER: "true"}


async def list_projects(
    client: HarborClient,
    *,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
    name: Optional[str] = None,
    public: Optional[bool] = None,
) -> Dict[str, Any]:
    """
    List projects visible to the configured account.
    - name: Harbor's fuzzy name filter.
    - public: restrict to public (True) or private (False) projects.
    """
    page = check_page(page)
    page_size = clamp_page_size(page_size)

    params: Dict[str, Any] = {"page": page, "page_size": page_size, "name": name}
    if public is not None:
        params["public"] = "true" if public else "false"

    elements, total = await client.get_page(
        "/projects", params=params, tool="list_projects"
    )
    items = [
        Project.model_validate(e).to_summary().model_dump() for e in elements
    ]
    return page_envelope(items, page=page, page_size=page_size, total=total)


async def get_project(client: HarborClient, project: int | str) -> Dict[str, Any]:
    """Fetch one project by name or numeric id."""
    path, headers = project_path(project)
    payload = await client.get(path, headers=headers, tool="get_project")
    model = Project.model_validate(payload)
    return {
        **model.to_summary().model_dump(),
        "metadata": model.metadata,
        "updated": model.update_time,
    }


async def create_project(
    client: HarborClient,
    project_name: str,
    *,
    public: bool = False,
    storage_limit: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Create a project. storage_limit is in bytes; -1 means unlimited.
    Harbor answers 201 with an empty body, so the new project is re-read.
    """
    project_name = (project_name or "").strip()
    if not project_name:
        raise invalid_params("project_name must not be empty")

    body: Dict[str, Any] = {
        "project_name": project_name,
        "metadata": {"public": "true" if public else "false"},
    }
    if storage_limit is not None:
        body["storage_limit"] = storage_limit

    await client.post("/projects", json=body, tool="create_project")
    created = await get_project(client, project_name)
    return {"status": "created", "project": created}


async def delete_project(client: HarborClient, project: int | str) -> Dict[str, Any]:
    """Delete a project. Harbor refuses while it still holds repositories."""
    path, headers = project_path(project)
    await client.delete(path, headers=headers, tool="delete_project")
    return {"status": "deleted", "project": str(project)}
