"""Pre-release gate — first in the chain, wraps ``enforce_pre_release_guard``."""

from __future__ import annotations

from pinbump.gates.base import BaseGate, GateContext
from pinbump.models.gates import Allowed, Blocked
from pinbump.versioning.prerelease import enforce_pre_release_guard


class PreReleaseGate(BaseGate):
    """Blocks alpha/beta/rc targets unless pre-releases were requested."""

    def __init__(self, include_prerelease: bool = False) -> None:
        self.include_prerelease = include_prerelease

    @property
    def gate_id(self) -> str:
        return "pre_release"

    @property
    def display_name(self) -> str:
        return "Pre-release Guard"

    def evaluate(self, context: GateContext) -> Allowed | Blocked:
        return enforce_pre_release_guard(self.include_prerelease, context.target_version)
