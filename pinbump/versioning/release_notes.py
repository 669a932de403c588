"""CPython release notes from the GitHub releases API."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

from pinbump.versioning._http import DEFAULT_TIMEOUT, client, github_headers

logger = logging.getLogger(__name__)

CPYTHON_RELEASE_URL = "https://api.github.com/repos/python/cpython/releases/tags/"


class ReleaseNotesFetchError(RuntimeError):
    """Raised on any non-2xx response other than 404."""


def fetch_release_notes(
    tag_name: str,
    *,
    token: str | None = None,
    session: Any | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    user_agent: str | None = None,
) -> str | None:
    """Return the release body for *tag_name*; None when there is no release."""
    normalized = tag_name.strip()
    if not normalized:
        raise ValueError("tag_name is required to fetch release notes.")

    response = client(session).get(
        f"{CPYTHON_RELEASE_URL}{quote(normalized, safe='')}",
        headers=github_headers(token, user_agent),
        timeout=timeout,
    )
    if response.status_code == 404:
        logger.debug("No release published for %s", normalized)
        return None
    if not response.ok:
        raise ReleaseNotesFetchError(
            f"Failed to fetch release notes for {normalized} (status {response.status_code})."
        )

    try:
        payload = response.json()
    except ValueError as exc:
        raise ReleaseNotesFetchError(f"Release notes for {normalized} are not JSON.") from exc
    if not isinstance(payload, dict):
        raise ReleaseNotesFetchError(f"Unexpected payload for release {normalized}.")

    body = payload.get("body")
    return body if isinstance(body, str) else None
