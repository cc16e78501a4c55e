import json

import pytest
import respx
from harbor_mcp.core.client import HarborAuth, HarborClient, HarborHTTPError
from harbor_mcp.core.tools.projects import (
    create_project,
    delete_project,
    get_project,
    list_projects,
)
from httpx import Response
from mcp.shared.exceptions import McpError
from mcp.types import INVALID_PARAMS

BASE = "https://mock-harbor.com/api/v2.0"

PROJECT = {
    "project_id": 1,
    "name": "library",
    "owner_name": "admin",
    "repo_count": 3,
    "creation_time": "2024-01-01T00:00:00Z",
    "update_time": "2024-02-01T00:00:00Z",
    "metadata": {"public": "true"},
}


@pytest.fixture
def client():
    return HarborClient(
        base_url="https://mock-harbor.com",
        auth=HarborAuth(kind="password", username="admin", secret="pw"),
    )


@pytest.mark.asyncio
@respx.mock
async def test_list_projects_returns_items_and_paging(client):
    respx.get(f"{BASE}/projects").mock(
        return_value=Response(
            200,
            json=[PROJECT, {"project_id": 2, "name": "private", "metadata": {}}],
            headers={"X-Total-Count": "25"},
        )
    )

    async with client:
        result = await list_projects(client)

    assert result["items"] == [
        {
            "id": 1,
            "name": "library",
            "public": True,
            "repo_count": 3,
            "owner": "admin",
            "created": "2024-01-01T00:00:00Z",
        },
        {
            "id": 2,
            "name": "private",
            "public": False,
            "repo_count": 0,
            "owner": None,
            "created": None,
        },
    ]
    assert result["page"] == 1
    assert result["page_size"] == 10
    assert result["total"] == 25
    assert result["next_page"] == 2


@pytest.mark.asyncio
@respx.mock
async def test_list_projects_params_sent_and_clamped(client):
    route = respx.get(f"{BASE}/projects").mock(
        return_value=Response(200, json=[], headers={"X-Total-Count": "0"})
    )

    async with client:
        result = await list_projects(
            client, page=3, page_size=500, name="lib", public=False
        )

    params = route.calls[0].request.url.params
    assert params["page"] == "3"
    assert params["page_size"] == "100"
    assert params["name"] == "lib"
    assert params["public"] == "false"
    assert result["next_page"] is None


@pytest.mark.asyncio
async def test_list_projects_rejects_page_zero(client):
    async with client:
        with pytest.raises(McpError) as exc:
            await list_projects(client, page=0)
    assert exc.value.error.code == INVALID_PARAMS


@pytest.mark.asyncio
@respx.mock
async def test_get_project_by_name_sets_resource_name_header(client):
    route = respx.get(f"{BASE}/projects/library").mock(
        return_value=Response(200, json=PROJECT)
    )

    async with client:
        result = await get_project(client, "library")

    assert route.calls[0].request.headers["X-Is-Resource-Name"] == "true"
    assert result["id"] == 1
    assert result["public"] is True
    assert result["metadata"] == {"public": "true"}
    assert result["updated"] == "2024-02-01T00:00:00Z"


@pytest.mark.asyncio
@respx.mock
async def test_get_project_by_id_has_no_resource_name_header(client):
    route = respx.get(f"{BASE}/projects/1").mock(
        return_value=Response(200, json=PROJECT)
    )

    async with client:
        await get_project(client, 1)

    assert "X-Is-Resource-Name" not in route.calls[0].request.headers


@pytest.mark.asyncio
@respx.mock
async def test_create_project_posts_body_and_rereads(client):
    post = respx.post(f"{BASE}/projects").mock(
        return_value=Response(201, headers={"Location": "/api/v2.0/projects/7"})
    )
    respx.get(f"{BASE}/projects/demo").mock(
        return_value=Response(
            200, json={"project_id": 7, "name": "demo", "metadata": {"public": "false"}}
        )
    )

    async with client:
        result = await create_project(client, "demo", storage_limit=-1)

    body = json.loads(post.calls[0].request.content)
    assert body == {
        "project_name": "demo",
        "metadata": {"public": "false"},
        "storage_limit": -1,
    }
    assert result["status"] == "created"
    assert result["project"]["id"] == 7


@pytest.mark.asyncio
@respx.mock
async def test_create_project_conflict_propagates(client):
    respx.post(f"{BASE}/projects").mock(
        return_value=Response(
            409, json={"errors": [{"code": "CONFLICT", "message": "project exists"}]}
        )
    )

    async with client:
        with pytest.raises(HarborHTTPError) as exc:
            await create_project(client, "demo")

    assert exc.value.status_code == 409


@pytest.mark.asyncio
async def test_create_project_requires_name(client):
    async with client:
        with pytest.raises(McpError) as exc:
            await create_project(client, "  ")
    assert exc.value.error.code == INVALID_PARAMS


@pytest.mark.asyncio
@respx.mock
async def test_delete_project(client):
    route = respx.delete(f"{BASE}/projects/demo").mock(return_value=Response(200))

    async with client:
        result = await delete_project(client, "demo")

    assert route.called
    assert result == {"status": "deleted", "project": "demo"}
