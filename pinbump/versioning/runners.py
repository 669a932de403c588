"""Hosted-runner availability from the actions/python-versions manifest."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidationError

from pinbump.models.versions import PlatformAvailability, RunnerAvailability
from pinbump.versioning._http import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, client

logger = logging.getLogger(__name__)

MANIFEST_URL = (
    "https://raw.githubusercontent.com/actions/python-versions/main/versions-manifest.json"
)

# Manifest platform prefix -> availability field.
PLATFORM_PREFIXES: dict[str, str] = {
    "win32": "win",
    "darwin": "mac",
    "linux": "linux",
}


class RunnerManifestError(RuntimeError):
    """Raised when the manifest cannot be fetched or has the wrong shape."""


class ManifestFile(BaseModel):
    platform: str


class ManifestEntry(BaseModel):
    version: str
    files: list[ManifestFile]


_MANIFEST_ADAPTER = TypeAdapter(list[ManifestEntry])


def platform_name(platform: str) -> str | None:
    """Map a manifest platform string such as ``darwin-arm64`` to win/mac/linux."""
    lowered = platform.lower()
    for prefix, name in PLATFORM_PREFIXES.items():
        if lowered.startswith(prefix):
            return name
    return None


def parse_manifest(payload: Any) -> list[ManifestEntry]:
    """Validate a raw manifest payload."""
    try:
        return _MANIFEST_ADAPTER.validate_python(payload)
    except ValidationError as exc:
        raise RunnerManifestError("Received invalid versions manifest structure.") from exc


def availability_from_manifest(version: str, manifest: Any) -> RunnerAvailability | None:
    """Availability of *version* per platform, or None if it is not listed."""
    entries = parse_manifest(manifest)
    entry = next((e for e in entries if e.version == version), None)
    if entry is None:
        return None

    flags = {"win": False, "mac": False, "linux": False}
    for file in entry.files:
        name = platform_name(file.platform)
        if name is not None:
            flags[name] = True

    return RunnerAvailability(
        version=entry.version,
        available_on=PlatformAvailability(**flags),
    )


def missing_runners(availability: RunnerAvailability | None) -> list[str]:
    """Sorted platforms without a build; all three when availability is unknown."""
    if availability is None:
        return ["linux", "mac", "win"]
    return availability.missing_platforms()


def fetch_runner_manifest(
    *,
    session: Any | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    user_agent: str | None = None,
) -> list[dict[str, Any]]:
    """Download the raw versions manifest."""
    response = client(session).get(
        MANIFEST_URL,
        headers={"User-Agent": user_agent or DEFAULT_USER_AGENT},
        timeout=timeout,
    )
    if not response.ok:
        raise RunnerManifestError(
            "Failed to fetch versions manifest from actions/python-versions "
            f"(status {response.status_code})."
        )
    payload = response.json()
    logger.debug("Fetched runner manifest with %d entries", len(payload))
    return payload
