"""Pinbump data models — all Pydantic v2, all frozen (immutable)."""

from pinbump.models.collaborators import (
    BranchCommitResult,
    PullRequestRef,
    PullRequestResult,
)
from pinbump.models.gates import Allowed, Blocked, GateResult, SkipReason
from pinbump.models.occurrences import (
    ScanResult,
    TrackAlignmentResult,
    VersionOccurrence,
)
from pinbump.models.outcomes import PipelineOutcome, SkipOutcome, SuccessOutcome
from pinbump.models.patches import (
    DryRunResult,
    IdempotenceResult,
    PatchResult,
    RewriteContext,
)
from pinbump.models.request import PipelineRequest, Snapshots
from pinbump.models.versions import (
    PlatformAvailability,
    ResolvedVersion,
    RunnerAvailability,
    StableTag,
)

__all__ = [
    # occurrences
    "VersionOccurrence",
    "ScanResult",
    "TrackAlignmentResult",
    # versions
    "StableTag",
    "ResolvedVersion",
    "PlatformAvailability",
    "RunnerAvailability",
    # gates
    "SkipReason",
    "Allowed",
    "Blocked",
    "GateResult",
    # patches
    "RewriteContext",
    "PatchResult",
    "DryRunResult",
    "IdempotenceResult",
    # collaborators
    "BranchCommitResult",
    "PullRequestRef",
    "PullRequestResult",
    # outcomes
    "SkipOutcome",
    "SuccessOutcome",
    "PipelineOutcome",
    # request
    "PipelineRequest",
    "Snapshots",
]
