"""``pinbump bump [WORKSPACE]`` — run the full bump pipeline.

Scans the tree, resolves the newest patch of the track, runs the
eligibility gates and, unless ``--dry-run``, rewrites the pins.  With
``--allow-pr-creation`` the change is committed on
``chore/bump-python-<track>``, pushed, and a pull request is opened.

Exit codes: 0 for success and skips, 1 when no version can be resolved,
2 for configuration errors.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import requests
import typer
from pydantic import ValidationError
from rich.console import Console

from pinbump.cli.render import OutcomeRenderer
from pinbump.config import ConfigurationError, settings
from pinbump.core.orchestrator import Capabilities, Orchestrator
from pinbump.git.branch import SubprocessGit
from pinbump.git.pull_request import GitHubPullRequests
from pinbump.models.request import Snapshots
from pinbump.versioning.cpython_tags import TagFetchError
from pinbump.versioning.python_org import PythonOrgFetchError
from pinbump.versioning.resolver import ResolutionError

console = Console()


def _load_snapshots(path: Path) -> Snapshots:
    try:
        return Snapshots.model_validate_json(path.read_text("utf-8"))
    except OSError as exc:
        raise ConfigurationError(f"Cannot read snapshots file {path}: {exc}") from exc
    except ValidationError as exc:
        raise ConfigurationError(
            f"Invalid snapshots file {path} ({exc.error_count()} error(s)): {exc}"
        ) from exc


def _capabilities(allow_pr_creation: bool) -> Capabilities:
    if not allow_pr_creation:
        return Capabilities()
    pulls = (
        GitHubPullRequests(
            settings.github_token,
            timeout=settings.http_timeout_seconds,
            user_agent=settings.user_agent,
        )
        if settings.github_token
        else None
    )
    return Capabilities(git=SubprocessGit(), pull_requests=pulls)


def bump_cmd(
    workspace: Path = typer.Argument(
        Path("."),
        help="Repository root to update.",
    ),
    track: Optional[str] = typer.Option(
        None,
        "--track",
        "-t",
        help="CPython track to bump, e.g. 3.13.",
    ),
    path: Optional[list[str]] = typer.Option(
        None,
        "--path",
        "-p",
        help="Include glob (repeatable). Defaults to the configured globs.",
    ),
    ignore: Optional[list[str]] = typer.Option(
        None,
        "--ignore",
        help="Extra ignore glob (repeatable).",
    ),
    include_prerelease: bool = typer.Option(
        False,
        "--include-prerelease",
        help="Allow alpha, beta and rc targets.",
    ),
    dry_run: Optional[bool] = typer.Option(
        None,
        "--dry-run/--no-dry-run",
        help="Only report what would change.",
    ),
    allow_pr_creation: bool = typer.Option(
        False,
        "--allow-pr-creation",
        help="Commit, push and open a pull request.",
    ),
    security_keyword: Optional[list[str]] = typer.Option(
        None,
        "--security-keyword",
        "-k",
        help="Only bump when the release notes mention this (repeatable).",
    ),
    no_network: bool = typer.Option(
        False,
        "--no-network",
        help="Fail instead of fetching sources without a snapshot.",
    ),
    snapshots: Optional[Path] = typer.Option(
        None,
        "--snapshots",
        help="JSON file with cpython_tags, python_org_html, runner_manifest, release_notes.",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the outcome as JSON.",
    ),
) -> None:
    """Bump pinned CPython patch versions in WORKSPACE."""
    try:
        overrides = {
            "track": track or settings.track,
            "include_prerelease": include_prerelease or settings.include_prerelease,
            "paths": path or settings.paths,
            "ignore": ignore or settings.ignore,
            "dry_run": settings.dry_run if dry_run is None else dry_run,
            "allow_pr_creation": allow_pr_creation or settings.allow_pr_creation,
            "no_network_fallback": no_network or settings.no_network_fallback,
            "security_keywords": security_keyword or settings.security_keywords,
        }
        if snapshots is not None:
            overrides["snapshots"] = _load_snapshots(snapshots)
        request = settings.to_request(workspace, **overrides)
        orchestrator = Orchestrator(_capabilities(request.allow_pr_creation))
        outcome = orchestrator.run(request)
    except ConfigurationError as exc:
        console.print(f"[bold red]Configuration error:[/bold red] {exc}")
        raise typer.Exit(code=2)
    except (ResolutionError, TagFetchError, PythonOrgFetchError, requests.RequestException) as exc:
        console.print(f"[bold red]Resolution failed:[/bold red] {exc}")
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(outcome.model_dump_json(indent=2))
    else:
        OutcomeRenderer(console=console).print_outcome(outcome)
