"""Tree scanner — discovers candidate files and collects version occurrences."""

from __future__ import annotations

import logging
from pathlib import Path

from pinbump.models.occurrences import ScanResult, VersionOccurrence
from pinbump.scanning.discovery import discover_files
from pinbump.scanning.patterns import find_version_occurrences

logger = logging.getLogger(__name__)


def read_text_exact(path: Path) -> str:
    """Read *path* as UTF-8 without newline translation."""
    with path.open("r", encoding="utf-8", newline="") as fh:
        return fh.read()


def _read_file_safe(path: Path) -> str | None:
    """Return the file text, or None if it vanished after discovery.

    Any other read error propagates.
    """
    try:
        return read_text_exact(path)
    except FileNotFoundError:
        logger.debug("Skipping %s: removed before it could be read", path)
        return None


def scan_for_python_versions(
    root: Path | str,
    patterns: list[str],
    ignore: list[str] | None = None,
    follow_symlinks: bool = False,
) -> ScanResult:
    """Scan *root* for pinned CPython versions.

    Occurrences are sorted globally by ``(file, line, column)``.
    """
    root_path = Path(root)
    relative_files = discover_files(
        root_path,
        patterns,
        ignore=ignore,
        follow_symlinks=follow_symlinks,
    )

    occurrences: list[VersionOccurrence] = []
    files_scanned = 0

    for relative in relative_files:
        content = _read_file_safe(root_path / relative)
        if content is None:
            continue

        files_scanned += 1
        found = find_version_occurrences(relative, content)
        if found:
            logger.debug("%s: %d occurrence(s)", relative, len(found))
        occurrences.extend(found)

    occurrences.sort(key=lambda o: (o.file, o.line, o.column))
    logger.info(
        "Scanned %d file(s), found %d pinned version(s)",
        files_scanned,
        len(occurrences),
    )
    return ScanResult(files_scanned=files_scanned, occurrences=occurrences)
