"""Main Typer application — imports and registers all CLI commands.

Entry point: ``pinbump`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import logging
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from pinbump.cli.commands.bump import bump_cmd
from pinbump.cli.commands.resolve import resolve_cmd
from pinbump.cli.commands.scan import scan_cmd
from pinbump.config import settings

app = typer.Typer(
    name="pinbump",
    help="pinbump: keep pinned CPython patch versions current.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="bump", help="Bump pinned CPython versions to the latest patch.")(bump_cmd)
app.command(name="scan", help="List pinned CPython versions in a tree.")(scan_cmd)
app.command(name="resolve", help="Resolve the latest patch release of a track.")(resolve_cmd)


def configure_logging(level: str) -> None:
    """Route all log records through a single RichHandler on stderr."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)
        ],
        force=True,
    )


@app.callback()
def main_callback(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (defaults to PINBUMP_LOG_LEVEL or INFO).",
    ),
) -> None:
    """pinbump: keep pinned CPython patch versions current."""
    configure_logging(log_level or settings.log_level)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
