import json

import pytest
import respx
from harbor_mcp.core.client import HarborAuth, HarborClient, HarborHTTPError
from harbor_mcp.core.tools.artifacts import (
    artifact_path,
    create_tag,
    delete_artifact,
    delete_tag,
    get_artifact,
    list_artifacts,
    list_tags,
)
from httpx import Response
from mcp.shared.exceptions import McpError
from mcp.types import INVALID_PARAMS

REPO = "https://mock-harbor.com/api/v2.0/projects/library/repositories/nginx"
DIGEST = "sha256:4c0fdaa8b6341bfdeca5f18f7837462c80cff90527ee35ef185571e1c327beac"

ARTIFACT = {
    "id": 11,
    "digest": DIGEST,
    "type": "IMAGE",
    "media_type": "application/vnd.oci.image.manifest.v1+json",
    "size": 1024,
    "push_time": "2024-03-01T00:00:00Z",
    "pull_time": "2024-03-02T00:00:00Z",
    "tags": [{"id": 1, "name": "latest", "immutable": False}],
    "extra_attrs": {"architecture": "amd64", "os": "linux"},
}


@pytest.fixture
def client():
    return HarborClient(
        base_url="https://mock-harbor.com",
        auth=HarborAuth(kind="password", username="admin", secret="pw"),
    )


def test_artifact_path_keeps_digest_colon():
    assert artifact_path("library", "nginx", DIGEST) == (
        f"/projects/library/repositories/nginx/artifacts/{DIGEST}"
    )


def test_artifact_path_requires_reference():
    with pytest.raises(McpError) as exc:
        artifact_path("library", "nginx", " ")
    assert exc.value.error.code == INVALID_PARAMS


@pytest.mark.asyncio
@respx.mock
async def test_list_artifacts(client):
    route = respx.get(f"{REPO}/artifacts").mock(
        return_value=Response(
            200,
            json=[ARTIFACT, {"digest": "sha256:00", "tags": None}],
            headers={"X-Total-Count": "2"},
        )
    )

    async with client:
        result = await list_artifacts(client, "library", "nginx")

    assert route.calls[0].request.url.params["with_tag"] == "true"
    assert result["items"][0] == {
        "digest": DIGEST,
        "type": "IMAGE",
        "size": 1024,
        "tags": ["latest"],
        "pushed": "2024-03-01T00:00:00Z",
        "architecture": "amd64",
        "os": "linux",
    }
    assert result["items"][1]["tags"] == []
    assert result["total"] == 2


@pytest.mark.asyncio
@respx.mock
async def test_get_artifact_by_tag(client):
    respx.get(f"{REPO}/artifacts/latest").mock(
        return_value=Response(200, json=ARTIFACT)
    )

    async with client:
        result = await get_artifact(client, "library", "nginx", "latest")

    assert result["digest"] == DIGEST
    assert result["media_type"] == "application/vnd.oci.image.manifest.v1+json"
    assert result["pulled"] == "2024-03-02T00:00:00Z"


@pytest.mark.asyncio
@respx.mock
async def test_get_artifact_not_found(client):
    respx.get(f"{REPO}/artifacts/missing").mock(
        return_value=Response(
            404, json={"errors": [{"code": "NOT_FOUND", "message": "artifact not found"}]}
        )
    )

    async with client:
        with pytest.raises(HarborHTTPError) as exc:
            await get_artifact(client, "library", "nginx", "missing")

    assert exc.value.status_code == 404


@pytest.mark.asyncio
@respx.mock
async def test_delete_artifact(client):
    route = respx.delete(f"{REPO}/artifacts/{DIGEST}").mock(return_value=Response(200))

    async with client:
        result = await delete_artifact(client, "library", "nginx", DIGEST)

    assert route.called
    assert result == {"status": "deleted", "reference": DIGEST}


@pytest.mark.asyncio
@respx.mock
async def test_list_tags(client):
    respx.get(f"{REPO}/artifacts/latest/tags").mock(
        return_value=Response(
            200,
            json=[
                {"name": "latest", "push_time": "t1", "immutable": False},
                {"name": "1.25", "push_time": "t2", "immutable": True},
            ],
        )
    )

    async with client:
        result = await list_tags(client, "library", "nginx", "latest")

    assert result == {
        "items": [
            {"name": "latest", "pushed": "t1", "immutable": False},
            {"name": "1.25", "pushed": "t2", "immutable": True},
        ],
        "total": 2,
    }


@pytest.mark.asyncio
@respx.mock
async def test_create_tag(client):
    route = respx.post(f"{REPO}/artifacts/{DIGEST}/tags").mock(
        return_value=Response(201)
    )

    async with client:
        result = await create_tag(client, "library", "nginx", DIGEST, "stable")

    assert json.loads(route.calls[0].request.content) == {"name": "stable"}
    assert result["status"] == "created"
    assert result["tag_name"] == "stable"


@pytest.mark.asyncio
@respx.mock
async def test_delete_tag(client):
    route = respx.delete(f"{REPO}/artifacts/latest/tags/old").mock(
        return_value=Response(200)
    )

    async with client:
        result = await delete_tag(client, "library", "nginx", "latest", "old")

    assert route.called
    assert result == {"status": "deleted", "tag_name": "old", "reference": "latest"}
