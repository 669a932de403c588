"""Version source models — tags, resolved targets, runner availability."""

from __future__ import annotations

from packaging.version import InvalidVersion, Version
from pydantic import BaseModel, ConfigDict


class StableTag(BaseModel):
    """A CPython release tag as reported by the tag source.

    Pre-release tags are only produced when explicitly requested; their
    ``version`` uses the ``3.14.0-rc.1`` spelling.
    """

    model_config = ConfigDict(frozen=True)

    tag_name: str  # e.g. "v3.13.2"
    version: str  # e.g. "3.13.2"
    major: int
    minor: int
    patch: int
    commit_sha: str = ""

    @property
    def track(self) -> str:
        return f"{self.major}.{self.minor}"

    @property
    def is_prerelease(self) -> bool:
        try:
            return Version(self.version).is_prerelease
        except InvalidVersion:
            return False


class ResolvedVersion(BaseModel):
    """The single chosen upgrade target for a track."""

    model_config = ConfigDict(frozen=True)

    version: str
    source_tag: str = ""
    source_commit: str = ""
    source: str = "tags"  # "tags" or "python.org"


class PlatformAvailability(BaseModel):
    """Which hosted-runner platforms publish a build."""

    model_config = ConfigDict(frozen=True)

    win: bool = False
    mac: bool = False
    linux: bool = False


class RunnerAvailability(BaseModel):
    """Hosted-runner availability for one CPython version."""

    model_config = ConfigDict(frozen=True)

    version: str
    available_on: PlatformAvailability = PlatformAvailability()

    def missing_platforms(self) -> list[str]:
        """Sorted names of the platforms without a build."""
        return sorted(
            name
            for name, available in self.available_on.model_dump().items()
            if not available
        )
