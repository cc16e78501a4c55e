from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

# --- Harbor entities (lenient; Harbor adds fields between releases) ---


class HarborModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class Project(HarborModel):
    project_id: int
    name: str
    owner_name: Optional[str] = None
    repo_count: int = 0
    creation_time: Optional[str] = None
    update_time: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @property
    def public(self) -> bool:
        # Harbor stores project metadata as strings: {"public": "true"}
        return str(self.metadata.get("public", "false")).lower() == "true"

    def to_summary(self) -> "ProjectSummary":
        return ProjectSummary(
            id=self.project_id,
            name=self.name,
            public=self.public,
            repo_count=self.repo_count,
            owner=self.owner_name,
            created=self.creation_time,
        )


class Repository(HarborModel):
    id: int
    name: str
    project_id: Optional[int] = None
    description: Optional[str] = None
    artifact_count: int = 0
    pull_count: int = 0
    creation_time: Optional[str] = None
    update_time: Optional[str] = None

    def to_summary(self) -> "RepositorySummary":
        return RepositorySummary(
            id=self.id,
            name=self.name,
            artifact_count=self.artifact_count,
            pull_count=self.pull_count,
            updated=self.update_time,
        )


class Tag(HarborModel):
    id: Optional[int] = None
    name: str
    push_time: Optional[str] = None
    pull_time: Optional[str] = None
    immutable: bool = False

    def to_summary(self) -> "TagSummary":
        return TagSummary(
            name=self.name,
            pushed=self.push_time,
            immutable=self.immutable,
        )


class Artifact(HarborModel):
    id: Optional[int] = None
    digest: str
    type: Optional[str] = None
    media_type: Optional[str] = None
    size: Optional[int] = None
    push_time: Optional[str] = None
    pull_time: Optional[str] = None
    # Harbor returns null rather than [] when an artifact is untagged
    tags: Optional[List[Tag]] = None
    extra_attrs: Dict[str, Any] = Field(default_factory=dict)

    @property
    def tag_names(self) -> List[str]:
        return [t.name for t in self.tags or []]

    def to_summary(self) -> "ArtifactSummary":
        return ArtifactSummary(
            digest=self.digest,
            type=self.type,
            size=self.size,
            tags=self.tag_names,
            pushed=self.push_time,
            architecture=self.extra_attrs.get("architecture"),
            os=self.extra_attrs.get("os"),
        )


# --- Summary Models (Output) ---


class ProjectSummary(BaseModel):
    id: int
    name: str
    public: bool
    repo_count: int
    owner: Optional[str]
    created: Optional[str]


class RepositorySummary(BaseModel):
    id: int
    name: str
    artifact_count: int
    pull_count: int
    updated: Optional[str]


class TagSummary(BaseModel):
    name: str
    pushed: Optional[str]
    immutable: bool


class ArtifactSummary(BaseModel):
    digest: str
    type: Optional[str]
    size: Optional[int]
    tags: List[str]
    pushed: Optional[str]
    architecture: Optional[str]
    os: Optional[str]


# --- System ---


class SystemInfo(HarborModel):
    harbor_version: Optional[str] = None
    auth_mode: Optional[str] = None
    registry_url: Optional[str] = None
    external_url: Optional[str] = None
    read_only: Optional[bool] = None
    registry_storage_provider_name: Optional[str] = None


class ComponentHealth(HarborModel):
    name: str
    status: str
    error: Optional[str] = None


class OverallHealth(HarborModel):
    status: str
    components: List[ComponentHealth] = Field(default_factory=list)

    @property
    def unhealthy(self) -> List[str]:
        return [c.name for c in self.components if c.status != "healthy"]
