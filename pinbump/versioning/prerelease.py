"""Pre-release guard — keep alpha/beta/rc targets out unless requested."""

from __future__ import annotations

import re

from packaging.version import InvalidVersion, Version

from pinbump.models.gates import Allowed, Blocked, SkipReason

_SEMVER_PRERELEASE_RE = re.compile(r"^v?\d+\.\d+\.\d+-[0-9A-Za-z.-]+$")


def is_prerelease(version: str) -> bool:
    """Whether *version* carries pre-release identifiers.

    Accepts both the semver spelling (``3.13.0-rc.1``) and PEP 440
    (``3.13.0rc1``).  Unparseable strings are not pre-releases.
    """
    candidate = version.strip()
    if _SEMVER_PRERELEASE_RE.match(candidate):
        return True
    try:
        return Version(candidate).is_prerelease
    except InvalidVersion:
        return False


def enforce_pre_release_guard(
    include_prerelease: bool, version: str | None
) -> Allowed | Blocked:
    """Block a pre-release target unless *include_prerelease* is set.

    A ``None`` version has nothing to guard and is allowed.
    """
    if version is None:
        return Allowed()
    if is_prerelease(version) and not include_prerelease:
        return Blocked(
            reason=SkipReason.PRE_RELEASE_GUARDED,
            details={"version": version},
        )
    return Allowed()
