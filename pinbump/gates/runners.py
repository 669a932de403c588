"""Runner-availability gate — every hosted platform must publish a build."""

from __future__ import annotations

import logging
from typing import Any

import requests

from pinbump.core.sources import Live, Snapshot
from pinbump.gates.base import BaseGate, GateContext
from pinbump.models.gates import Allowed, Blocked, SkipReason
from pinbump.models.versions import RunnerAvailability
from pinbump.versioning.runners import (
    RunnerManifestError,
    availability_from_manifest,
    missing_runners,
)

logger = logging.getLogger(__name__)


class RunnerAvailabilityGate(BaseGate):
    """Blocks when linux, mac or win lacks a build of the target.

    An unreachable or malformed manifest counts as every platform missing.
    """

    def __init__(self, manifest: Snapshot[Any] | Live[Any]) -> None:
        self.manifest = manifest

    @property
    def gate_id(self) -> str:
        return "runner_availability"

    @property
    def display_name(self) -> str:
        return "Runner Availability"

    def _availability(self, version: str) -> RunnerAvailability | None:
        try:
            return availability_from_manifest(version, self.manifest.get())
        except (requests.RequestException, RunnerManifestError) as exc:
            logger.warning(
                "Runner manifest unreachable, treating all platforms as missing: %s", exc
            )
            return None

    def evaluate(self, context: GateContext) -> Allowed | Blocked:
        missing = missing_runners(self._availability(context.target_version))
        if missing:
            return Blocked(
                reason=SkipReason.RUNNERS_MISSING,
                details={"missing": missing},
            )
        return Allowed()
