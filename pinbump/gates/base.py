"""Abstract base gate with an enforced evaluation wrapper.

Every concrete gate inherits from ``BaseGate`` and implements only
``evaluate()``.  The ``run_gate()`` wrapper is **not overridable**: it
logs the verdict and guarantees a ``GateResult`` comes back, so the
driver loop in ``pinbump.gates.run_gates`` can rely on a uniform shape.
"""

from __future__ import annotations

import abc
import logging
from typing import final

from pydantic import BaseModel, ConfigDict

from pinbump.models.gates import Allowed, Blocked
from pinbump.models.occurrences import VersionOccurrence
from pinbump.models.versions import ResolvedVersion

logger = logging.getLogger(__name__)


class GateContext(BaseModel):
    """Working state threaded through the gate chain.

    Unlike the value models this is mutable: gates may narrow
    ``update_set`` and record ``skipped_workflow_files``.
    """

    model_config = ConfigDict(validate_assignment=True)

    track: str
    target: ResolvedVersion
    occurrences: list[VersionOccurrence]
    update_set: list[VersionOccurrence] = []
    skipped_workflow_files: list[str] = []

    @property
    def target_version(self) -> str:
        return self.target.version

    @property
    def files_in_update_set(self) -> list[str]:
        return sorted({o.file for o in self.update_set})


class BaseGate(abc.ABC):
    """Abstract base for all eligibility gates.

    Subclasses **must** implement ``gate_id``, ``display_name`` and
    ``evaluate(context)``.  Subclasses **must not** override ``run_gate()``.
    """

    @property
    @abc.abstractmethod
    def gate_id(self) -> str:
        """Unique gate identifier (e.g. ``'security'``)."""
        ...

    @property
    @abc.abstractmethod
    def display_name(self) -> str:
        """Human-readable name used in logs."""
        ...

    @abc.abstractmethod
    def evaluate(self, context: GateContext) -> Allowed | Blocked:
        """Return ``Allowed`` to continue or ``Blocked`` to halt the run."""
        ...

    @final
    def run_gate(self, context: GateContext) -> Allowed | Blocked:
        """Evaluate the gate and log the verdict.  **Do not override.**"""
        result = self.evaluate(context)
        if isinstance(result, Blocked):
            logger.info(
                "%s [%s] blocked: %s %s",
                self.display_name,
                self.gate_id,
                result.reason.value,
                result.details,
            )
        else:
            logger.info("%s [%s] passed", self.display_name, self.gate_id)
        return result

    def __repr__(self) -> str:
        return f"<{type(self).__name__} gate_id={self.gate_id!r}>"
