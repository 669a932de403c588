"""Idempotence evaluation over computed patches."""

from __future__ import annotations

from collections.abc import Iterable

from pinbump.models.patches import IdempotenceResult, PatchResult
from pinbump.scanning.patterns import find_version_occurrences


def evaluate_idempotence(patches: Iterable[PatchResult]) -> IdempotenceResult:
    """Report whether files holding pins would be left untouched.

    ``already_latest`` is True when at least one file holds a pin on the
    target's track and no patch changes anything.
    """
    patches = list(patches)
    matched_files = sorted(
        {
            p.file_path
            for p in patches
            if p.replacements
            or any(
                o.full_version == p.to_version
                for o in find_version_occurrences(p.file_path, p.original_content)
            )
        }
    )
    has_changes = any(p.changed for p in patches)
    return IdempotenceResult(
        already_latest=bool(matched_files) and not has_changes,
        matched_files=matched_files,
    )
