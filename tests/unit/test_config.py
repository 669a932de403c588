"""Unit tests for settings, track validation and the pipeline request."""

from __future__ import annotations

from pathlib import Path

import pytest

from pinbump.config import (
    DEFAULT_PATTERNS,
    ConfigurationError,
    PinbumpSettings,
    validate_track,
)
from pinbump.models.request import PipelineRequest

_ENV_VARS = [
    "PINBUMP_TRACK",
    "PINBUMP_DRY_RUN",
    "PINBUMP_GITHUB_TOKEN",
    "GITHUB_TOKEN",
    "PINBUMP_REPOSITORY",
    "GITHUB_REPOSITORY",
    "PINBUMP_SECURITY_KEYWORDS",
]


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> pytest.MonkeyPatch:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)  # no stray .env file
    return monkeypatch


class TestValidateTrack:
    def test_valid(self):
        assert validate_track("3.13") == "3.13"
        assert validate_track(" 3.12 ") == "3.12"

    @pytest.mark.parametrize("track", ["3", "3.13.1", "three.thirteen", "", "v3.13"])
    def test_invalid(self, track: str):
        with pytest.raises(ConfigurationError, match=f'Received "{track}"'):
            validate_track(track)


class TestPinbumpSettings:
    """Environment variables override defaults."""

    def test_defaults(self, clean_env):
        s = PinbumpSettings()
        assert s.track == "3.13"
        assert s.dry_run is True
        assert s.allow_pr_creation is False
        assert s.paths == DEFAULT_PATTERNS
        assert s.github_token is None
        assert s.default_branch == "main"

    def test_env_override(self, clean_env):
        clean_env.setenv("PINBUMP_TRACK", "3.12")
        clean_env.setenv("PINBUMP_DRY_RUN", "false")
        clean_env.setenv("PINBUMP_SECURITY_KEYWORDS", '["cve", "security"]')
        s = PinbumpSettings()
        assert s.track == "3.12"
        assert s.dry_run is False
        assert s.security_keywords == ["cve", "security"]

    def test_ci_variables_are_honoured(self, clean_env):
        clean_env.setenv("GITHUB_TOKEN", "ghs_ci")
        clean_env.setenv("GITHUB_REPOSITORY", "octo/demo")
        s = PinbumpSettings()
        assert s.github_token == "ghs_ci"
        assert s.repository == "octo/demo"

    def test_prefixed_token_wins(self, clean_env):
        clean_env.setenv("GITHUB_TOKEN", "ghs_ci")
        clean_env.setenv("PINBUMP_GITHUB_TOKEN", "ghp_me")
        assert PinbumpSettings().github_token == "ghp_me"

    def test_to_request(self, clean_env, tmp_path: Path):
        request = PinbumpSettings().to_request(tmp_path, track="3.11", dry_run=False)
        assert isinstance(request, PipelineRequest)
        assert request.track == "3.11"
        assert request.dry_run is False
        assert request.paths == DEFAULT_PATTERNS


class TestPipelineRequest:
    """Invalid input is rejected before any work starts."""

    def test_bad_track(self, tmp_path: Path):
        with pytest.raises(ConfigurationError):
            PipelineRequest(workspace=tmp_path, track="3", paths=["**/Dockerfile"])

    def test_no_patterns(self, tmp_path: Path):
        with pytest.raises(ConfigurationError, match="glob pattern"):
            PipelineRequest(workspace=tmp_path, track="3.13", paths=["  "])

    def test_keywords_are_normalised(self, tmp_path: Path):
        request = PipelineRequest(
            workspace=tmp_path,
            track="3.13",
            paths=["**/Dockerfile"],
            security_keywords=[" cve ", "", "  "],
        )
        assert request.security_keywords == ["cve"]

    def test_safe_defaults(self, tmp_path: Path):
        request = PipelineRequest(workspace=tmp_path, track="3.13", paths=["**/Dockerfile"])
        assert request.dry_run is True
        assert request.allow_pr_creation is False

    @pytest.mark.parametrize(
        ("repository", "expected"),
        [("octo/demo", ("octo", "demo")), ("octo", None), ("/demo", None), (None, None)],
    )
    def test_owner_and_repo(self, tmp_path: Path, repository, expected):
        request = PipelineRequest(
            workspace=tmp_path, track="3.13", paths=["x"], repository=repository
        )
        assert request.owner_and_repo == expected
