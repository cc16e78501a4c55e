import pytest
from harbor_mcp.core.models import (
    Artifact,
    OverallHealth,
    Project,
    Repository,
    SystemInfo,
)
from pydantic import ValidationError

PROJECT = {
    "project_id": 1,
    "name": "library",
    "owner_name": "admin",
    "repo_count": 4,
    "creation_time": "2024-01-01T00:00:00.000Z",
    "update_time": "2024-02-01T00:00:00.000Z",
    "metadata": {"public": "true", "auto_scan": "false"},
    "cve_allowlist": {"items": []},
}


def test_project_parses_and_summary():
    project = Project.model_validate(PROJECT)
    summary = project.to_summary()

    assert summary.id == 1
    assert summary.name == "library"
    assert summary.public is True
    assert summary.repo_count == 4
    assert summary.owner == "admin"
    assert summary.created == "2024-01-01T00:00:00.000Z"


@pytest.mark.parametrize(
    "metadata,expected",
    [({}, False), ({"public": "false"}, False), ({"public": "True"}, True)],
)
def test_project_public_flag_from_string_metadata(metadata, expected):
    project = Project.model_validate({"project_id": 2, "name": "p", "metadata": metadata})
    assert project.public is expected


def test_project_requires_id_and_name():
    with pytest.raises(ValidationError):
        Project.model_validate({"name": "library"})


def test_repository_summary_defaults():
    repo = Repository.model_validate({"id": 9, "name": "library/nginx"})
    summary = repo.to_summary()

    assert summary.artifact_count == 0
    assert summary.pull_count == 0
    assert summary.updated is None


def test_artifact_summary_reads_platform_and_tags():
    artifact = Artifact.model_validate(
        {
            "digest": "sha256:abc",
            "type": "IMAGE",
            "size": 1024,
            "push_time": "2024-03-01T00:00:00Z",
            "tags": [{"name": "latest"}, {"name": "1.25"}],
            "extra_attrs": {"architecture": "amd64", "os": "linux"},
        }
    )
    summary = artifact.to_summary()

    assert summary.tags == ["latest", "1.25"]
    assert summary.architecture == "amd64"
    assert summary.os == "linux"


def test_untagged_artifact_has_empty_tag_list():
    artifact = Artifact.model_validate({"digest": "sha256:abc", "tags": None})
    assert artifact.tag_names == []
    assert artifact.to_summary().architecture is None


def test_system_info_ignores_unknown_fields():
    info = SystemInfo.model_validate(
        {"harbor_version": "v2.10.0", "with_notary": False, "banner_message": ""}
    )
    assert info.harbor_version == "v2.10.0"
    assert info.read_only is None


def test_overall_health_unhealthy_components():
    health = OverallHealth.model_validate(
        {
            "status": "unhealthy",
            "components": [
                {"name": "core", "status": "healthy"},
                {"name": "database", "status": "unhealthy", "error": "timeout"},
            ],
        }
    )
    assert health.unhealthy == ["database"]
    assert health.components[1].error == "timeout"
