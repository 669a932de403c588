"""Results returned by the git and pull-request collaborators."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict


class BranchCommitResult(BaseModel):
    """Outcome of checking out the bump branch and committing."""

    model_config = ConfigDict(frozen=True)

    branch: str
    commit_created: bool = False
    files_committed: list[str] = []


class PullRequestRef(BaseModel):
    """An already-open pull request."""

    model_config = ConfigDict(frozen=True)

    number: int
    url: str | None = None


class PullRequestResult(BaseModel):
    """Outcome of creating or updating the bump pull request."""

    model_config = ConfigDict(frozen=True)

    action: Literal["created", "updated"]
    number: int
    url: str | None = None
