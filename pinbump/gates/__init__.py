"""Eligibility gates — the ordered, short-circuiting checks after resolution.

Usage::

    from pinbump.gates import build_gate_sequence, run_gates

    gates = build_gate_sequence(request, release_notes, manifest)
    blocked = run_gates(gates, context)

The order is fixed: pre-release guard, security, runner availability,
already-latest, workflow permission.
"""

from __future__ import annotations

from typing import Any

from pinbump.core.sources import Live, Snapshot
from pinbump.gates.already_latest import AlreadyLatestGate
from pinbump.gates.base import BaseGate, GateContext
from pinbump.gates.prerelease import PreReleaseGate
from pinbump.gates.runners import RunnerAvailabilityGate
from pinbump.gates.security import SecurityGate
from pinbump.gates.workflow_permission import WorkflowPermissionGate
from pinbump.models.gates import Blocked
from pinbump.models.request import PipelineRequest

# Ordered gate ids, matching build_gate_sequence.
GATE_ORDER: list[str] = [
    "pre_release",
    "security",
    "runner_availability",
    "already_latest",
    "workflow_permission",
]


def build_gate_sequence(
    request: PipelineRequest,
    release_notes: Snapshot[Any] | Live[Any],
    manifest: Snapshot[Any] | Live[Any],
) -> list[BaseGate]:
    """Instantiate the gates for *request* in their fixed order."""
    return [
        PreReleaseGate(request.include_prerelease),
        SecurityGate(request.security_keywords, release_notes),
        RunnerAvailabilityGate(manifest),
        AlreadyLatestGate(),
        WorkflowPermissionGate(request.github_token, enabled=request.allow_pr_creation),
    ]


def run_gates(gates: list[BaseGate], context: GateContext) -> Blocked | None:
    """Evaluate *gates* in order; return the first ``Blocked`` or None."""
    for gate in gates:
        result = gate.run_gate(context)
        if isinstance(result, Blocked):
            return result
    return None


__all__ = [
    "GATE_ORDER",
    "AlreadyLatestGate",
    "BaseGate",
    "GateContext",
    "PreReleaseGate",
    "RunnerAvailabilityGate",
    "SecurityGate",
    "WorkflowPermissionGate",
    "build_gate_sequence",
    "run_gates",
]
