"""``pinbump scan [WORKSPACE]`` — list pinned CPython versions in a tree."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from pinbump.cli.render import OutcomeRenderer
from pinbump.config import ConfigurationError, settings
from pinbump.scanning.scanner import scan_for_python_versions
from pinbump.scanning.track_alignment import determine_single_track

console = Console()


def scan_cmd(
    workspace: Path = typer.Argument(
        Path("."),
        help="Repository root to scan.",
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
    follow_symlinks: bool = typer.Option(
        False,
        "--follow-symlinks",
        help="Descend into symlinked directories.",
    ),
) -> None:
    """Scan WORKSPACE and print every pinned CPython version found."""
    try:
        scan = scan_for_python_versions(
            workspace,
            path or settings.paths,
            ignore=ignore or settings.ignore,
            follow_symlinks=follow_symlinks,
        )
    except ConfigurationError as exc:
        console.print(f"[bold red]Configuration error:[/bold red] {exc}")
        raise typer.Exit(code=2)

    OutcomeRenderer(console=console).print_scan(scan, determine_single_track(scan.occurrences))
