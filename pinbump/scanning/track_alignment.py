"""Track alignment — reduce occurrences to one ``MAJOR.MINOR`` track."""

from __future__ import annotations

from collections.abc import Iterable

from pinbump.models.occurrences import TrackAlignmentResult, VersionOccurrence


def determine_single_track(
    occurrences: Iterable[VersionOccurrence],
) -> TrackAlignmentResult:
    """Return the single track, or every distinct track as a conflict.

    More than one track is a hard stop for the caller: a run never
    upgrades several tracks at once.
    """
    tracks = {o.track for o in occurrences}

    if not tracks:
        return TrackAlignmentResult()
    if len(tracks) == 1:
        return TrackAlignmentResult(track=tracks.pop())
    return TrackAlignmentResult(conflicts=sorted(tracks))
