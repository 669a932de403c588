"""Gate verdict models and the closed set of skip reasons."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class SkipReason(str, Enum):
    """Every reason a run can end without changing anything."""

    NO_MATCHES_FOUND = "no_matches_found"
    MULTIPLE_TRACKS_DETECTED = "multiple_tracks_detected"
    PRE_RELEASE_GUARDED = "pre_release_guarded"
    SECURITY_GATE_BLOCKED = "security_gate_blocked"
    RUNNERS_MISSING = "runners_missing"
    ALREADY_LATEST = "already_latest"
    WORKFLOW_PERMISSION_REQUIRED = "workflow_permission_required"
    PR_EXISTS = "pr_exists"
    PR_CREATION_FAILED = "pr_creation_failed"


class Allowed(BaseModel):
    """The gate passed; the pipeline continues."""

    model_config = ConfigDict(frozen=True)

    allowed: Literal[True] = True
    details: dict[str, Any] = {}


class Blocked(BaseModel):
    """The gate halted the pipeline with a specific reason."""

    model_config = ConfigDict(frozen=True)

    allowed: Literal[False] = False
    reason: SkipReason
    details: dict[str, Any] = {}


GateResult = Annotated[Union[Allowed, Blocked], Field(discriminator="allowed")]
