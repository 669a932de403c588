"""Runtime configuration — env-driven, snapshot-aware.

Centralized config using pydantic-settings for environment variable
support. Reads from a .env file and PINBUMP_* environment variables; the
GitHub token and repository also fall back to the variables a CI runner
exports (``GITHUB_TOKEN``, ``GITHUB_REPOSITORY``).
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from pinbump.models.request import PipelineRequest

_TRACK_RE = re.compile(r"^[0-9]+\.[0-9]+$")

# Include globs used when the caller supplies none.
DEFAULT_PATTERNS: list[str] = [
    ".github/workflows/**/*.yml",
    ".github/workflows/**/*.yaml",
    "**/Dockerfile",
    "**/*.dockerfile",
    "**/.python-version",
    "**/.tool-versions",
    "**/runtime.txt",
    "**/pyproject.toml",
    "**/tox.ini",
    "**/Pipfile",
    "**/environment.yml",
    "**/environment.yaml",
]


class ConfigurationError(RuntimeError):
    """Raised for invalid input that must stop the run before any work.

    Not a ``ValueError``: it must escape Pydantic validators unwrapped.
    """


def validate_track(track: str) -> str:
    """Return the trimmed track, or raise ``ConfigurationError``.

    A track is a ``MAJOR.MINOR`` pair such as ``3.13``.
    """
    normalized = track.strip()
    if not _TRACK_RE.match(normalized):
        raise ConfigurationError(
            f'Input "track" must match X.Y (e.g. 3.13). Received "{track}".'
        )
    return normalized


class PinbumpSettings(BaseSettings):
    """Pipeline settings with environment variable overrides.

    Examples
    --------
    Override via environment::

        export PINBUMP_TRACK=3.12
        export PINBUMP_DRY_RUN=false
        export PINBUMP_SECURITY_KEYWORDS='["cve", "security"]'

    Or via .env file::

        PINBUMP_NO_NETWORK_FALLBACK=true
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="PINBUMP_",
        env_file_encoding="utf-8",
        populate_by_name=True,
        extra="ignore",
    )

    # What to bump
    track: str = "3.13"
    include_prerelease: bool = False
    paths: list[str] = Field(default_factory=lambda: list(DEFAULT_PATTERNS))
    ignore: list[str] = Field(default_factory=list)
    follow_symlinks: bool = False

    # Behaviour switches
    dry_run: bool = True
    allow_pr_creation: bool = False
    no_network_fallback: bool = False
    security_keywords: list[str] = Field(default_factory=list)

    # Code host
    github_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices("PINBUMP_GITHUB_TOKEN", "GITHUB_TOKEN"),
    )
    repository: str | None = Field(
        default=None,
        validation_alias=AliasChoices("PINBUMP_REPOSITORY", "GITHUB_REPOSITORY"),
    )
    default_branch: str = "main"
    author_name: str | None = None
    author_email: str | None = None

    # Observability and transport
    log_level: str = "INFO"
    http_timeout_seconds: float = 30.0
    user_agent: str = "pinbump/0.1.0"

    def to_request(
        self, workspace: Path, **overrides: Any
    ) -> PipelineRequest:
        """Build a ``PipelineRequest`` from these settings.

        Keyword overrides win over the configured values.
        """
        from pinbump.models.request import PipelineRequest

        values: dict[str, Any] = {
            "workspace": workspace,
            "track": self.track,
            "include_prerelease": self.include_prerelease,
            "paths": self.paths,
            "ignore": self.ignore,
            "follow_symlinks": self.follow_symlinks,
            "dry_run": self.dry_run,
            "allow_pr_creation": self.allow_pr_creation,
            "no_network_fallback": self.no_network_fallback,
            "security_keywords": self.security_keywords,
            "github_token": self.github_token,
            "repository": self.repository,
            "default_branch": self.default_branch,
            "author_name": self.author_name,
            "author_email": self.author_email,
        }
        values.update(overrides)
        return PipelineRequest(**values)


# Module-level singleton: import as `from pinbump.config import settings`
settings = PinbumpSettings()
