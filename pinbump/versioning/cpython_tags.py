"""CPython tag source — paginated tag listing from the GitHub API.

Tag names look like ``v3.13.2`` (stable) or ``v3.14.0rc1`` / ``v3.14.0a1``
/ ``v3.14.0b2`` (pre-release).  Pre-releases are rendered in the
``3.14.0-rc.1`` spelling used by the runner manifest and are only kept
when explicitly requested.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from packaging.version import Version

from pinbump.models.versions import StableTag
from pinbump.versioning._http import DEFAULT_TIMEOUT, client, github_headers

logger = logging.getLogger(__name__)

CPYTHON_TAGS_URL = "https://api.github.com/repos/python/cpython/tags"

_TAG_RE = re.compile(r"^v?(\d+)\.(\d+)\.(\d+)(?:(a|b|rc)(\d+))?$")
_PRE_LABELS = {"a": "alpha", "b": "beta", "rc": "rc"}


class TagFetchError(RuntimeError):
    """Raised when the tag listing cannot be fetched or understood."""


def parse_tag_name(
    tag_name: str, commit_sha: str = "", include_prerelease: bool = False
) -> StableTag | None:
    """Parse a CPython tag name, or return None if it is not a release tag."""
    normalized = tag_name.strip()
    if normalized.startswith("refs/tags/"):
        normalized = normalized[len("refs/tags/"):]

    match = _TAG_RE.match(normalized)
    if not match:
        return None

    major, minor, patch, pre_label, pre_number = match.groups()
    version = f"{int(major)}.{int(minor)}.{int(patch)}"
    if pre_label:
        if not include_prerelease:
            return None
        version = f"{version}-{_PRE_LABELS[pre_label]}.{int(pre_number)}"

    return StableTag(
        tag_name=tag_name,
        version=version,
        major=int(major),
        minor=int(minor),
        patch=int(patch),
        commit_sha=commit_sha,
    )


def fetch_cpython_tags(
    *,
    token: str | None = None,
    per_page: int = 100,
    include_prerelease: bool = False,
    session: Any | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    user_agent: str | None = None,
) -> list[StableTag]:
    """List CPython release tags, newest first.

    Pages are requested until a short page or a page that yields no
    release tag.

    Raises
    ------
    ValueError
        If *per_page* is not positive.
    TagFetchError
        On a non-2xx response or an unexpected payload.
    """
    if per_page <= 0:
        raise ValueError("per_page must be greater than zero.")

    http = client(session)
    results: list[StableTag] = []
    page = 1

    while True:
        response = http.get(
            CPYTHON_TAGS_URL,
            params={"per_page": per_page, "page": page},
            headers=github_headers(token, user_agent),
            timeout=timeout,
        )
        if not response.ok:
            raise TagFetchError(
                f"Failed to fetch CPython tags from GitHub (status {response.status_code})."
            )

        payload = response.json()
        if not isinstance(payload, list):
            raise TagFetchError("Unexpected payload when fetching CPython tags from GitHub.")

        added = 0
        for entry in payload:
            if not isinstance(entry, dict):
                continue
            name = entry.get("name")
            sha = (entry.get("commit") or {}).get("sha")
            if not isinstance(name, str) or not isinstance(sha, str):
                continue
            tag = parse_tag_name(name, sha, include_prerelease=include_prerelease)
            if tag is None:
                continue
            results.append(tag)
            added += 1

        logger.debug("Tag page %d: %d entries, %d release tags", page, len(payload), added)

        if len(payload) < per_page or added == 0:
            break
        page += 1

    results.sort(key=lambda t: Version(t.version), reverse=True)
    logger.info("Fetched %d CPython release tag(s)", len(results))
    return results
