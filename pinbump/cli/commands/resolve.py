"""``pinbump resolve TRACK`` — print the latest patch release of a track."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import requests
import typer
from pydantic import TypeAdapter, ValidationError
from rich.console import Console

from pinbump.config import ConfigurationError, settings
from pinbump.core.orchestrator import resolve_target
from pinbump.core.sources import select_source
from pinbump.models.versions import StableTag
from pinbump.versioning.cpython_tags import TagFetchError, fetch_cpython_tags
from pinbump.versioning.python_org import PythonOrgFetchError, fetch_python_org_html
from pinbump.versioning.resolver import ResolutionError

console = Console()

_TAGS_ADAPTER = TypeAdapter(list[StableTag])


def _load_tags(path: Path) -> list[StableTag]:
    try:
        return _TAGS_ADAPTER.validate_json(path.read_text("utf-8"))
    except OSError as exc:
        raise ConfigurationError(f"Cannot read tags snapshot {path}: {exc}") from exc
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid tags snapshot {path}: {exc}") from exc


def _load_html(path: Path) -> str:
    try:
        return path.read_text("utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Cannot read HTML snapshot {path}: {exc}") from exc


def resolve_cmd(
    track: str = typer.Argument(..., help="Track to resolve, e.g. 3.13."),
    include_prerelease: bool = typer.Option(
        False,
        "--include-prerelease",
        help="Consider alpha, beta and rc releases.",
    ),
    tags_snapshot: Optional[Path] = typer.Option(
        None,
        "--tags-snapshot",
        help="JSON file with a list of tag objects to use instead of GitHub.",
    ),
    html_snapshot: Optional[Path] = typer.Option(
        None,
        "--html-snapshot",
        help="HTML file to use instead of the python.org listing.",
    ),
    no_network: bool = typer.Option(
        False,
        "--no-network",
        help="Fail instead of fetching sources without a snapshot.",
    ),
) -> None:
    """Resolve TRACK to its newest patch release and print it."""
    transport = {
        "timeout": settings.http_timeout_seconds,
        "user_agent": settings.user_agent,
    }

    try:
        tags = _load_tags(tags_snapshot) if tags_snapshot else None
        html = _load_html(html_snapshot) if html_snapshot else None
        resolved = resolve_target(
            track,
            select_source(
                "cpython_tags",
                tags,
                lambda: fetch_cpython_tags(
                    token=settings.github_token,
                    include_prerelease=include_prerelease,
                    **transport,
                ),
                no_network=no_network,
            ),
            select_source(
                "python_org_html",
                html,
                lambda: fetch_python_org_html(**transport),
                no_network=no_network,
            ),
            include_prerelease=include_prerelease,
        )
    except ConfigurationError as exc:
        console.print(f"[bold red]Configuration error:[/bold red] {exc}")
        raise typer.Exit(code=2)
    except (ResolutionError, TagFetchError, PythonOrgFetchError, requests.RequestException) as exc:
        console.print(f"[bold red]Resolution failed:[/bold red] {exc}")
        raise typer.Exit(code=1)

    console.print(f"[bold]{resolved.version}[/bold] [dim]({resolved.source}: {resolved.source_tag})[/dim]")
