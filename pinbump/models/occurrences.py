"""Scan result models — located version tokens and track alignment."""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field

_SUFFIX_RE = re.compile(r"^-?(alpha|beta|rc|a|b)\.?([0-9]+)$", re.IGNORECASE)
_SUFFIX_LABELS = {"a": "alpha", "b": "beta"}


class VersionOccurrence(BaseModel):
    """One located, parsed ``MAJOR.MINOR.PATCH`` token in one file.

    ``offset`` is the index of the version token itself (not of the
    surrounding match) in the decoded file text, so replacements computed
    against that same text are position-exact.
    """

    model_config = ConfigDict(frozen=True)

    file: str  # forward-slash relative path
    line: int = Field(ge=1)
    column: int = Field(ge=1)
    matched: str  # e.g. "3.13.2"
    major: int = Field(ge=0)
    minor: int = Field(ge=0)
    patch: int = Field(ge=0)
    offset: int = Field(ge=0)
    suffix: str = ""  # pre-release suffix as written, e.g. "rc1" or "-rc.1"

    @property
    def track(self) -> str:
        """The ``MAJOR.MINOR`` track this occurrence pins."""
        return f"{self.major}.{self.minor}"

    @property
    def pinned(self) -> str:
        """The text a rewrite replaces: the token plus any suffix."""
        return self.matched + self.suffix

    @property
    def full_version(self) -> str:
        """The pinned version in the ``3.14.0-rc.1`` spelling used for targets."""
        match = _SUFFIX_RE.match(self.suffix)
        if match is None:
            return self.matched
        label = match.group(1).lower()
        return f"{self.matched}-{_SUFFIX_LABELS.get(label, label)}.{int(match.group(2))}"


class ScanResult(BaseModel):
    """Output of a tree scan."""

    model_config = ConfigDict(frozen=True)

    files_scanned: int = 0
    occurrences: list[VersionOccurrence] = []

    @property
    def files(self) -> list[str]:
        """Sorted unique files holding at least one occurrence."""
        return sorted({o.file for o in self.occurrences})


class TrackAlignmentResult(BaseModel):
    """Either a single track, a non-empty conflict list, or neither (no input)."""

    model_config = ConfigDict(frozen=True)

    track: str | None = None
    conflicts: list[str] = []
