"""Latest-patch resolution across the tag source and the python.org fallback."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from packaging.version import InvalidVersion, Version

from pinbump.config import validate_track
from pinbump.models.versions import ResolvedVersion, StableTag

logger = logging.getLogger(__name__)


class ResolutionError(RuntimeError):
    """Raised when no source yields a version for the track."""


def _sort_key(tag: StableTag) -> Version:
    return Version(tag.version)


def resolve_latest_patch(
    track: str,
    tags: Iterable[StableTag],
    include_prerelease: bool = False,
) -> ResolvedVersion | None:
    """Pick the highest tagged release on *track*.

    Pre-release tags are ignored unless *include_prerelease* is set.
    Returns None when no tag is on the track.
    """
    normalized = validate_track(track)

    candidates: list[StableTag] = []
    for tag in tags:
        if tag.track != normalized:
            continue
        try:
            Version(tag.version)
        except InvalidVersion:
            logger.debug("Ignoring tag %s with unparseable version", tag.tag_name)
            continue
        if tag.is_prerelease and not include_prerelease:
            continue
        candidates.append(tag)

    if not candidates:
        return None

    latest = max(candidates, key=_sort_key)
    return ResolvedVersion(
        version=latest.version,
        source_tag=latest.tag_name,
        source_commit=latest.commit_sha,
        source="tags",
    )


def select_target_version(
    track: str,
    primary: ResolvedVersion | None,
    fallback: ResolvedVersion | None,
) -> ResolvedVersion:
    """Apply the resolution contract: primary, else fallback, else fail.

    Raises
    ------
    ResolutionError
        If neither source produced a version.
    """
    if primary is not None:
        logger.info("Resolved %s to %s from tag %s", track, primary.version, primary.source_tag)
        return primary
    if fallback is not None:
        logger.info("Resolved %s to %s from python.org", track, fallback.version)
        return fallback
    raise ResolutionError(f'Unable to resolve latest patch version for track "{track}".')
