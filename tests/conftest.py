"""Shared test fixtures for pinbump."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from pinbump.models.occurrences import VersionOccurrence
from pinbump.models.request import PipelineRequest, Snapshots
from pinbump.models.versions import StableTag


# ---------------------------------------------------------------------------
# HTTP doubles
# ---------------------------------------------------------------------------


class FakeResponse:
    """Minimal stand-in for ``requests.Response``."""

    def __init__(self, status_code: int = 200, payload: Any = None, text: str = "") -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("No JSON body")
        return self._payload


class FakeSession:
    """Records every call and replays queued responses in order.

    ``responses`` maps an HTTP method to a list of ``FakeResponse``.
    """

    def __init__(self, **responses: list[FakeResponse]) -> None:
        self.responses = {method: list(queue) for method, queue in responses.items()}
        self.calls: list[tuple[str, str, dict[str, Any]]] = []

    def _next(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append((method, url, kwargs))
        queue = self.responses.get(method, [])
        if not queue:
            raise AssertionError(f"Unexpected {method.upper()} {url}")
        return queue.pop(0)

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        return self._next("get", url, **kwargs)

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        return self._next("post", url, **kwargs)

    def patch(self, url: str, **kwargs: Any) -> FakeResponse:
        return self._next("patch", url, **kwargs)


@pytest.fixture
def fake_response() -> Callable[..., FakeResponse]:
    """Factory fixture: ``fake_response(200, payload)``."""
    return FakeResponse


@pytest.fixture
def fake_session() -> Callable[..., FakeSession]:
    """Factory fixture: ``fake_session(get=[FakeResponse(...)])``."""
    return FakeSession


# ---------------------------------------------------------------------------
# File trees
# ---------------------------------------------------------------------------


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Factory fixture: write ``{relative_path: content}`` under tmp_path.

    Content is written byte-for-byte (no newline translation).
    """

    def _factory(files: dict[str, str]) -> Path:
        for relative, content in files.items():
            path = tmp_path / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w", encoding="utf-8", newline="") as fh:
                fh.write(content)
        return tmp_path

    return _factory


def read_exact(path: Path) -> str:
    with path.open("r", encoding="utf-8", newline="") as fh:
        return fh.read()


@pytest.fixture
def read_file() -> Callable[[Path], str]:
    """Read a file without newline translation."""
    return read_exact


# ---------------------------------------------------------------------------
# Model factories
# ---------------------------------------------------------------------------


@pytest.fixture
def make_occurrence() -> Callable[..., VersionOccurrence]:
    """Factory fixture: build a VersionOccurrence from a version string."""

    def _factory(
        version: str = "3.13.0",
        file: str = "Dockerfile",
        line: int = 1,
        column: int = 1,
        offset: int = 0,
        suffix: str = "",
    ) -> VersionOccurrence:
        major, minor, patch = (int(p) for p in version.split("."))
        return VersionOccurrence(
            file=file,
            line=line,
            column=column,
            matched=version,
            major=major,
            minor=minor,
            patch=patch,
            offset=offset,
            suffix=suffix,
        )

    return _factory


def make_tag(version: str, sha: str = "abc123") -> StableTag:
    major, minor, patch = (int(p) for p in version.split("-")[0].split("."))
    return StableTag(
        tag_name=f"v{version}",
        version=version,
        major=major,
        minor=minor,
        patch=patch,
        commit_sha=sha,
    )


def full_manifest(*versions: str) -> list[dict[str, Any]]:
    """A runner manifest listing *versions* on all three platforms."""
    return [
        {
            "version": version,
            "files": [
                {"platform": "linux", "filename": f"python-{version}-linux-22.04-x64.tar.gz"},
                {"platform": "darwin", "filename": f"python-{version}-darwin-arm64.tar.gz"},
                {"platform": "win32", "filename": f"python-{version}-win32-x64.zip"},
            ],
        }
        for version in versions
    ]


@pytest.fixture
def snapshots() -> Snapshots:
    """Offline sources resolving 3.13 to 3.13.1 with every runner available."""
    return Snapshots(
        cpython_tags=[make_tag("3.13.1"), make_tag("3.13.0"), make_tag("3.12.8")],
        python_org_html="<html><body><a>Python 3.13.1</a></body></html>",
        runner_manifest=full_manifest("3.13.1", "3.13.0"),
        release_notes={"v3.13.1": "Addresses CVE-2025-1234 in the ssl module."},
    )


@pytest.fixture
def make_request(tmp_path: Path, snapshots: Snapshots) -> Callable[..., PipelineRequest]:
    """Factory fixture: an offline PipelineRequest rooted at tmp_path."""

    def _factory(**overrides: Any) -> PipelineRequest:
        values: dict[str, Any] = {
            "workspace": tmp_path,
            "track": "3.13",
            "paths": ["**/Dockerfile", "**/runtime.txt", ".github/workflows/**/*.yml"],
            "no_network_fallback": True,
            "snapshots": snapshots,
        }
        values.update(overrides)
        return PipelineRequest(**values)

    return _factory


@pytest.fixture
def tag_factory() -> Callable[..., StableTag]:
    """Factory fixture: ``tag_factory("3.13.1")`` -> StableTag ``v3.13.1``."""
    return make_tag


@pytest.fixture
def manifest_factory() -> Callable[..., list[dict[str, Any]]]:
    """Factory fixture: ``manifest_factory("3.13.1")`` -> full-platform manifest."""
    return full_manifest
