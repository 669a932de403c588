"""Security gate — only upgrade when the release notes mention a keyword.

Active only when at least one non-empty keyword is configured.  Release
notes are looked up under the resolved tag, then ``v<version>``, then the
bare version.  Missing notes block with ``releaseNotesFound=False``;
notes without any keyword (case-insensitive substring) block with
``releaseNotesFound=True``.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from pinbump.core.sources import Live, Snapshot
from pinbump.gates.base import BaseGate, GateContext
from pinbump.models.gates import Allowed, Blocked, SkipReason
from pinbump.versioning.release_notes import ReleaseNotesFetchError

logger = logging.getLogger(__name__)


class SecurityGate(BaseGate):
    """Requires a security keyword in the target's release notes."""

    def __init__(
        self,
        keywords: list[str],
        release_notes: Snapshot[Any] | Live[Any],
    ) -> None:
        self.keywords = [k.strip() for k in keywords if k and k.strip()]
        self.release_notes = release_notes

    @property
    def gate_id(self) -> str:
        return "security"

    @property
    def display_name(self) -> str:
        return "Security Gate"

    @staticmethod
    def _lookup_keys(context: GateContext) -> list[str]:
        version = context.target_version
        keys: list[str] = []
        for key in (context.target.source_tag, f"v{version}", version):
            if key and key not in keys:
                keys.append(key)
        return keys

    def _find_notes(self, context: GateContext) -> str | None:
        for key in self._lookup_keys(context):
            try:
                notes = self.release_notes.get(key)
            except (requests.RequestException, ReleaseNotesFetchError) as exc:
                logger.warning("Release notes for %s unavailable: %s", key, exc)
                continue
            if isinstance(notes, str):
                logger.debug("Release notes found under %s", key)
                return notes
        return None

    def evaluate(self, context: GateContext) -> Allowed | Blocked:
        if not self.keywords:
            return Allowed()

        notes = self._find_notes(context)
        if notes is None:
            return Blocked(
                reason=SkipReason.SECURITY_GATE_BLOCKED,
                details={"keywords": self.keywords, "releaseNotesFound": False},
            )

        lowered = notes.lower()
        matched = next((k for k in self.keywords if k.lower() in lowered), None)
        if matched is None:
            return Blocked(
                reason=SkipReason.SECURITY_GATE_BLOCKED,
                details={"keywords": self.keywords, "releaseNotesFound": True},
            )
        return Allowed(details={"matchedKeyword": matched})
