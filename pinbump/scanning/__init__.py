"""Scanning — locate pinned CPython versions across a file tree.

Modules
-------
patterns
    The closed pattern library and ``find_version_occurrences``.
discovery
    ``discover_files`` glob matching with the baseline ignore set.
scanner
    ``scan_for_python_versions`` over a whole tree.
track_alignment
    ``determine_single_track`` conflict detection.
"""

from pinbump.scanning.discovery import DEFAULT_IGNORES, discover_files
from pinbump.scanning.patterns import (
    PYTHON_VERSION_PATTERNS,
    PatternDefinition,
    PatternKind,
    find_version_occurrences,
)
from pinbump.scanning.scanner import read_text_exact, scan_for_python_versions
from pinbump.scanning.track_alignment import determine_single_track

__all__ = [
    "DEFAULT_IGNORES",
    "PYTHON_VERSION_PATTERNS",
    "PatternDefinition",
    "PatternKind",
    "determine_single_track",
    "discover_files",
    "find_version_occurrences",
    "read_text_exact",
    "scan_for_python_versions",
]
