"""Workflow-permission gate — keep workflow files out of pushes the token can't make."""

from __future__ import annotations

from pinbump.core.credentials import is_personal_token, is_workflow_file
from pinbump.gates.base import BaseGate, GateContext
from pinbump.models.gates import Allowed, Blocked, SkipReason


class WorkflowPermissionGate(BaseGate):
    """Excludes workflow files when the token is not a personal one.

    Only enforced when write access will be attempted (``enabled``).
    """

    def __init__(self, token: str | None, enabled: bool = True) -> None:
        self._token = token
        self.enabled = enabled

    @property
    def gate_id(self) -> str:
        return "workflow_permission"

    @property
    def display_name(self) -> str:
        return "Workflow Permission"

    def evaluate(self, context: GateContext) -> Allowed | Blocked:
        if not self.enabled or is_personal_token(self._token):
            return Allowed()

        kept = [o for o in context.update_set if not is_workflow_file(o.file)]
        skipped = sorted({o.file for o in context.update_set if is_workflow_file(o.file)})
        if not skipped:
            return Allowed()

        context.skipped_workflow_files = skipped
        if not kept:
            return Blocked(
                reason=SkipReason.WORKFLOW_PERMISSION_REQUIRED,
                details={"skippedWorkflowFiles": skipped},
            )
        context.update_set = kept
        return Allowed(details={"skippedWorkflowFiles": skipped})
