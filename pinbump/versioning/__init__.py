"""Versioning — find the newest eligible CPython patch for a track."""

from pinbump.versioning.cpython_tags import TagFetchError, fetch_cpython_tags, parse_tag_name
from pinbump.versioning.prerelease import enforce_pre_release_guard, is_prerelease
from pinbump.versioning.python_org import (
    PythonOrgFetchError,
    fetch_python_org_html,
    latest_from_html_index,
)
from pinbump.versioning.release_notes import ReleaseNotesFetchError, fetch_release_notes
from pinbump.versioning.resolver import (
    ResolutionError,
    resolve_latest_patch,
    select_target_version,
)
from pinbump.versioning.runners import (
    RunnerManifestError,
    availability_from_manifest,
    fetch_runner_manifest,
    missing_runners,
)

__all__ = [
    "PythonOrgFetchError",
    "ReleaseNotesFetchError",
    "ResolutionError",
    "RunnerManifestError",
    "TagFetchError",
    "availability_from_manifest",
    "enforce_pre_release_guard",
    "fetch_cpython_tags",
    "fetch_python_org_html",
    "fetch_release_notes",
    "fetch_runner_manifest",
    "is_prerelease",
    "latest_from_html_index",
    "missing_runners",
    "parse_tag_name",
    "resolve_latest_patch",
    "select_target_version",
]
