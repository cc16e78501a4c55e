from __future__ import annotations

from typing import Any, Dict, List
from urllib.parse import quote

from harbor_mcp.core.client import HarborClient
from harbor_mcp.core.errors import invalid_params
from harbor_mcp.core.models import Artifact, Tag
from harbor_mcp.core.tools._paging import (
    DEFAULT_PAGE_SIZE,
    check_page,
    clamp_page_size,
    page_envelope,
)
from harbor_mcp.core.tools.repositories import repository_path


def _require(value: str, field: str) -> str:
    value = (value or "").strip()
    if not value:
        raise invalid_params(f"{field} must not be empty")
    return value


def artifact_path(project_name: str, repository_name: str, reference: str) -> str:
    """reference is a digest (sha256:...) or a tag name."""
    reference = _require(reference, "reference")
    base = repository_path(project_name, repository_name)
    return f"{base}/artifacts/{quote(reference, safe=':')}"


async def list_artifacts(
    client: HarborClient,
    project_name: str,
    repository_name: str,
    *,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
    with_tag: bool = True,
) -> Dict[str, Any]:
    """List artifacts (images, charts, ...) in a repository, newest first."""
    page = check_page(page)
    page_size = clamp_page_size(page_size)
    params = {
        "page": page,
        "page_size": page_size,
        "with_tag": "true" if with_tag else "false",
    }
    elements, total = await client.get_page(
        f"{repository_path(project_name, repository_name)}/artifacts",
        params=params,
        tool="list_artifacts",
    )
    items = [Artifact.model_validate(e).to_summary().model_dump() for e in elements]
    return page_envelope(items, page=page, page_size=page_size, total=total)


async def get_artifact(
    client: HarborClient, project_name: str, repository_name: str, reference: str
) -> Dict[str, Any]:
    payload = await client.get(
        artifact_path(project_name, repository_name, reference),
        params={"with_tag": "true"},
        tool="get_artifact",
    )
    artifact = Artifact.model_validate(payload)
    return {
        **artifact.to_summary().model_dump(),
        "media_type": artifact.media_type,
        "pulled": artifact.pull_time,
    }


async def delete_artifact(
    client: HarborClient, project_name: str, repository_name: str, reference: str
) -> Dict[str, Any]:
    await client.delete(
        artifact_path(project_name, repository_name, reference),
        tool="delete_artifact",
    )
    return {"status": "deleted", "reference": reference}


async def list_tags(
    client: HarborClient, project_name: str, repository_name: str, reference: str
) -> Dict[str, Any]:
    """List the tags attached to one artifact."""
    elements, total = await client.get_page(
        f"{artifact_path(project_name, repository_name, reference)}/tags",
        tool="list_tags",
    )
    items: List[Dict[str, Any]] = [
        Tag.model_validate(e).to_summary().model_dump() for e in elements
    ]
    return {"items": items, "total": total if total is not None else len(items)}


async def create_tag(
    client: HarborClient,
    project_name: str,
    repository_name: str,
    reference: str,
    tag_name: str,
) -> Dict[str, Any]:
    tag_name = _require(tag_name, "tag_name")
    await client.post(
        f"{artifact_path(project_name, repository_name, reference)}/tags",
        json={"name": tag_name},
        tool="create_tag",
    )
    return {"status": "created", "tag_name": tag_name, "reference": reference}


async def delete_tag(
    client: HarborClient,
    project_name: str,
    repository_name: str,
    reference: str,
    tag_name: str,
) -> Dict[str, Any]:
    tag_name = _require(tag_name, "tag_name")
    await client.delete(
        f"{artifact_path(project_name, repository_name, reference)}"
        f"/tags/{quote(tag_name, safe='')}",
        tool="delete_tag",
    )
    return {"status": "deleted", "tag_name": tag_name, "reference": reference}
