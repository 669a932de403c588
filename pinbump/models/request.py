"""Pipeline entry contract — what a caller hands to the orchestrator."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from pinbump.config import ConfigurationError, validate_track
from pinbump.models.versions import StableTag


class Snapshots(BaseModel):
    """Pre-supplied substitutes for network responses.

    Any field left as None is fetched live, unless the request disables
    the network.
    """

    model_config = ConfigDict(frozen=True)

    cpython_tags: list[StableTag] | None = None
    python_org_html: str | None = None
    runner_manifest: list[dict[str, Any]] | None = None
    release_notes: dict[str, str] | None = None


class PipelineRequest(BaseModel):
    """Inputs for one pipeline run.

    Invalid tracks and empty include-glob lists raise
    ``ConfigurationError`` on construction.
    """

    model_config = ConfigDict(frozen=True)

    workspace: Path
    track: str
    include_prerelease: bool = False
    paths: list[str]
    ignore: list[str] = []
    follow_symlinks: bool = False
    dry_run: bool = True
    allow_pr_creation: bool = False
    no_network_fallback: bool = False
    security_keywords: list[str] = []
    snapshots: Snapshots | None = None

    # Code host
    github_token: str | None = None
    repository: str | None = None  # "owner/repo"
    default_branch: str = "main"
    author_name: str | None = None
    author_email: str | None = None

    @field_validator("track")
    @classmethod
    def _check_track(cls, value: str) -> str:
        return validate_track(value)

    @field_validator("paths")
    @classmethod
    def _check_paths(cls, value: list[str]) -> list[str]:
        cleaned = [p.strip() for p in value if p.strip()]
        if not cleaned:
            raise ConfigurationError("At least one glob pattern is required.")
        return cleaned

    @field_validator("security_keywords")
    @classmethod
    def _normalize_keywords(cls, value: list[str]) -> list[str]:
        return [k.strip() for k in value if k.strip()]

    @property
    def owner_and_repo(self) -> tuple[str, str] | None:
        """Split ``repository`` into ``(owner, repo)``, or None when unusable."""
        if not self.repository or "/" not in self.repository:
            return None
        owner, _, repo = self.repository.partition("/")
        if not owner or not repo:
            return None
        return owner, repo
