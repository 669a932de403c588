"""Already-latest check — drop pins that already equal the target."""

from __future__ import annotations

from pinbump.gates.base import BaseGate, GateContext
from pinbump.models.gates import Allowed, Blocked, SkipReason


class AlreadyLatestGate(BaseGate):
    """Narrows the update set; blocks when nothing is left to change."""

    @property
    def gate_id(self) -> str:
        return "already_latest"

    @property
    def display_name(self) -> str:
        return "Already Latest"

    def evaluate(self, context: GateContext) -> Allowed | Blocked:
        target = context.target_version
        context.update_set = [o for o in context.update_set if o.full_version != target]
        if not context.update_set:
            return Blocked(reason=SkipReason.ALREADY_LATEST)
        return Allowed()
