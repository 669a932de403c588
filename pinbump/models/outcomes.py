"""Pipeline outcome models — the single value a run produces."""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from pinbump.models.collaborators import PullRequestResult
from pinbump.models.gates import SkipReason


class SkipOutcome(BaseModel):
    """The run ended without side effects (or with absorbed write failures)."""

    model_config = ConfigDict(frozen=True)

    status: Literal["skip"] = "skip"
    reason: SkipReason
    target_version: str | None = None
    files_affected: list[str] | None = None
    details: dict[str, Any] | None = None


class SuccessOutcome(BaseModel):
    """The run computed (and, unless ``dry_run``, applied) an upgrade."""

    model_config = ConfigDict(frozen=True)

    status: Literal["success"] = "success"
    target_version: str
    files_changed: list[str] = []
    dry_run: bool = True
    side_effect_result: PullRequestResult | None = None
    skipped_workflow_files: list[str] = []


PipelineOutcome = Annotated[
    Union[SkipOutcome, SuccessOutcome], Field(discriminator="status")
]
