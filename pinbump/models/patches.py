"""Patch engine models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from pinbump.models.occurrences import VersionOccurrence


class RewriteContext(BaseModel):
    """Input to the patch engine for one file.

    When ``occurrences`` is omitted the content is scanned with the
    pattern library. When ``from_version`` is set only occurrences pinned
    to exactly that version are rewritten.
    """

    model_config = ConfigDict(frozen=True)

    file_path: str
    original_content: str
    to_version: str
    from_version: str | None = None
    occurrences: list[VersionOccurrence] | None = None


class PatchResult(BaseModel):
    """The computed rewrite of one file.

    ``changed`` is False exactly when ``updated_content`` equals
    ``original_content``.
    """

    model_config = ConfigDict(frozen=True)

    file_path: str
    original_content: str
    updated_content: str
    changed: bool = False
    replacements: list[VersionOccurrence] = []
    from_version: str | None = None
    to_version: str


class DryRunResult(BaseModel):
    """Preview of what a run would write."""

    model_config = ConfigDict(frozen=True)

    patches: list[PatchResult] = []
    summary: str = ""
    changed_files: list[str] = []


class IdempotenceResult(BaseModel):
    """Whether matched files are already at the target."""

    model_config = ConfigDict(frozen=True)

    already_latest: bool = False
    matched_files: list[str] = []
