"""Patch engine — position-exact, idempotent version rewrites.

Replacements are applied back-to-front (highest offset first) so that
earlier offsets stay valid after each substitution.  Occurrences already
at the target are no-ops, and a rewrite that would move a pin to another
``MAJOR.MINOR`` track is refused outright.
"""

from __future__ import annotations

import logging
from pathlib import Path

from packaging.version import Version

from pinbump.models.occurrences import VersionOccurrence
from pinbump.models.patches import PatchResult, RewriteContext
from pinbump.scanning.patterns import find_version_occurrences

logger = logging.getLogger(__name__)


def track_of(version: str) -> tuple[str, str]:
    """``(major, minor)`` strings of a dotted version."""
    parts = version.split(".")
    major = parts[0] if parts else ""
    minor = parts[1] if len(parts) > 1 else ""
    return major, minor


def share_track(from_version: str, to_version: str) -> bool:
    """Whether both versions sit on the same ``MAJOR.MINOR`` track."""
    return track_of(from_version) == track_of(to_version)


def _unchanged(context: RewriteContext) -> PatchResult:
    return PatchResult(
        file_path=context.file_path,
        original_content=context.original_content,
        updated_content=context.original_content,
        changed=False,
        replacements=[],
        from_version=context.from_version,
        to_version=context.to_version,
    )


def compute_patch(context: RewriteContext) -> PatchResult:
    """Rewrite the pinned versions of one file to ``context.to_version``."""
    to_version = context.to_version
    content = context.original_content

    if context.from_version is not None and not share_track(context.from_version, to_version):
        logger.debug(
            "%s: refusing cross-track rewrite %s -> %s",
            context.file_path,
            context.from_version,
            to_version,
        )
        return _unchanged(context)

    occurrences = (
        context.occurrences
        if context.occurrences is not None
        else find_version_occurrences(context.file_path, content)
    )

    selected: list[VersionOccurrence] = []
    for occurrence in occurrences:
        if context.from_version is not None and context.from_version not in (
            occurrence.matched,
            occurrence.full_version,
        ):
            continue
        if occurrence.full_version == to_version:
            continue
        if not share_track(occurrence.matched, to_version):
            continue
        end = occurrence.offset + len(occurrence.pinned)
        if content[occurrence.offset:end] != occurrence.pinned:
            logger.warning(
                "%s:%d:%d: expected %s at offset %d, skipping stale occurrence",
                context.file_path,
                occurrence.line,
                occurrence.column,
                occurrence.pinned,
                occurrence.offset,
            )
            continue
        selected.append(occurrence)

    if not selected:
        return _unchanged(context)

    updated = content
    applied: list[VersionOccurrence] = []
    last_start: int | None = None
    for occurrence in sorted(selected, key=lambda o: o.offset, reverse=True):
        end = occurrence.offset + len(occurrence.pinned)
        if last_start is not None and end > last_start:
            continue  # overlaps a replacement already applied
        updated = updated[:occurrence.offset] + to_version + updated[end:]
        last_start = occurrence.offset
        applied.append(occurrence)

    applied.sort(key=lambda o: o.offset)
    from_version = context.from_version or min(
        (o.full_version for o in applied), key=Version
    )
    changed = updated != content

    return PatchResult(
        file_path=context.file_path,
        original_content=content,
        updated_content=updated if changed else content,
        changed=changed,
        replacements=applied if changed else [],
        from_version=from_version,
        to_version=to_version,
    )


def write_patch(root: Path | str, patch: PatchResult) -> bool:
    """Write a changed patch back to disk under *root*.

    The file is written without newline translation.  Returns True when
    the file was written.
    """
    if not patch.changed:
        return False
    path = Path(root) / patch.file_path
    with path.open("w", encoding="utf-8", newline="") as fh:
        fh.write(patch.updated_content)
    logger.info("Updated %s (%d replacement(s))", patch.file_path, len(patch.replacements))
    return True
