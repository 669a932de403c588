"""python.org fallback — scrape the source-release listing for a track."""

from __future__ import annotations

import logging
import re
from html.parser import HTMLParser
from typing import Any

from packaging.version import Version

from pinbump.config import validate_track
from pinbump.models.versions import ResolvedVersion
from pinbump.versioning._http import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, client

logger = logging.getLogger(__name__)

PYTHON_RELEASES_URL = "https://www.python.org/downloads/source/"

_RELEASE_RE = re.compile(
    r"^(?:Python\s+)?(\d+)\.(\d+)\.(\d+)(?:(a|b|rc)(\d+))?\b", re.IGNORECASE
)
_PRE_LABELS = {"a": "alpha", "b": "beta", "rc": "rc"}


class PythonOrgFetchError(RuntimeError):
    """Raised when the python.org listing cannot be fetched."""


class _AnchorTextParser(HTMLParser):
    """Collects the text content of every ``<a>`` element."""

    def __init__(self) -> None:
        super().__init__()
        self.texts: list[str] = []
        self._depth = 0
        self._buffer: list[str] = []

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag == "a":
            if self._depth == 0:
                self._buffer = []
            self._depth += 1

    def handle_endtag(self, tag: str) -> None:
        if tag == "a" and self._depth:
            self._depth -= 1
            if self._depth == 0:
                self.texts.append("".join(self._buffer).strip())

    def handle_data(self, data: str) -> None:
        if self._depth:
            self._buffer.append(data)


def extract_versions(html: str, include_prerelease: bool = False) -> list[str]:
    """Release versions named by anchor texts such as ``Python 3.13.1``."""
    parser = _AnchorTextParser()
    parser.feed(html)
    parser.close()

    versions: set[str] = set()
    for text in parser.texts:
        match = _RELEASE_RE.match(text)
        if not match:
            continue
        major, minor, patch, pre_label, pre_number = match.groups()
        version = f"{int(major)}.{int(minor)}.{int(patch)}"
        if pre_label:
            if not include_prerelease:
                continue
            version = f"{version}-{_PRE_LABELS[pre_label.lower()]}.{int(pre_number)}"
        versions.add(version)
    return sorted(versions, key=Version, reverse=True)


def latest_from_html_index(
    track: str, html: str, include_prerelease: bool = False
) -> ResolvedVersion | None:
    """Highest release on *track* listed in *html*, or None."""
    normalized = validate_track(track)
    prefix = f"{normalized}."
    candidates = [
        v for v in extract_versions(html, include_prerelease) if v.startswith(prefix)
    ]
    if not candidates:
        return None

    version = candidates[0]
    return ResolvedVersion(
        version=version,
        source_tag=f"v{version}",
        source_commit="",
        source="python.org",
    )


def fetch_python_org_html(
    *,
    session: Any | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    user_agent: str | None = None,
) -> str:
    """Download the python.org source-release listing."""
    response = client(session).get(
        PYTHON_RELEASES_URL,
        headers={"User-Agent": user_agent or DEFAULT_USER_AGENT},
        timeout=timeout,
    )
    if not response.ok:
        raise PythonOrgFetchError(
            f"Failed to fetch python.org releases (status {response.status_code})."
        )
    logger.debug("Fetched python.org release listing (%d chars)", len(response.text))
    return response.text
