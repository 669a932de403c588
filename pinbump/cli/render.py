"""Rich terminal rendering for scan results and pipeline outcomes.

Color scheme
------------
- green  : success (files written or would be written)
- yellow : skip
- cyan   : file paths
"""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from pinbump.models.occurrences import ScanResult, TrackAlignmentResult
from pinbump.models.outcomes import SkipOutcome, SuccessOutcome


class OutcomeRenderer:
    """Renders scans and outcomes as Rich renderables.

    Parameters
    ----------
    console:
        Rich Console instance.  A new one is created if not provided.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    # ------------------------------------------------------------------
    # Scan
    # ------------------------------------------------------------------

    def render_scan(self, scan: ScanResult) -> Table:
        table = Table(title=f"Pinned versions ({scan.files_scanned} file(s) scanned)")
        table.add_column("File", style="cyan")
        table.add_column("Line", justify="right")
        table.add_column("Col", justify="right")
        table.add_column("Version", style="green")

        for o in scan.occurrences:
            table.add_row(o.file, str(o.line), str(o.column), o.pinned)
        return table

    def print_scan(self, scan: ScanResult, alignment: TrackAlignmentResult) -> None:
        self.console.print(self.render_scan(scan))
        if alignment.conflicts:
            self.console.print(
                f"[bold red]Multiple tracks:[/bold red] {', '.join(alignment.conflicts)}"
            )
        elif alignment.track:
            self.console.print(f"[bold]Track:[/bold] {alignment.track}")

    # ------------------------------------------------------------------
    # Outcome
    # ------------------------------------------------------------------

    def render_outcome(self, outcome: SkipOutcome | SuccessOutcome) -> Panel:
        if isinstance(outcome, SuccessOutcome):
            return self._render_success(outcome)
        return self._render_skip(outcome)

    @staticmethod
    def _render_success(outcome: SuccessOutcome) -> Panel:
        heading = (
            "[bold green]Dry run: files would be updated[/bold green]"
            if outcome.dry_run
            else "[bold green]Files updated[/bold green]"
        )
        lines = [
            heading,
            "",
            f"[bold]Target:[/bold] {outcome.target_version}",
            f"[bold]Files:[/bold]  {len(outcome.files_changed)}",
        ]
        lines += [f"  [cyan]{f}[/cyan]" for f in outcome.files_changed]

        if outcome.skipped_workflow_files:
            lines += ["", "[yellow]Workflow files left unchanged:[/yellow]"]
            lines += [f"  [cyan]{f}[/cyan]" for f in outcome.skipped_workflow_files]

        pr = outcome.side_effect_result
        if pr is not None:
            lines += ["", f"[bold]Pull request:[/bold] #{pr.number} {pr.action} {pr.url or ''}".rstrip()]

        return Panel(
            "\n".join(lines),
            title="[bold]pinbump[/bold]",
            border_style="green",
            padding=(1, 2),
        )

    @staticmethod
    def _render_skip(outcome: SkipOutcome) -> Panel:
        lines = [f"[bold yellow]Skipped:[/bold yellow] {outcome.reason.value}"]
        if outcome.target_version:
            lines += ["", f"[bold]Target:[/bold] {outcome.target_version}"]
        if outcome.files_affected:
            lines += ["", "[bold]Files:[/bold]"]
            lines += [f"  [cyan]{f}[/cyan]" for f in outcome.files_affected]
        if outcome.details:
            lines += [""]
            lines += [f"[dim]{key}: {value}[/dim]" for key, value in outcome.details.items()]

        return Panel(
            "\n".join(lines),
            title="[bold]pinbump[/bold]",
            border_style="yellow",
            padding=(1, 2),
        )

    def print_outcome(self, outcome: SkipOutcome | SuccessOutcome) -> None:
        self.console.print(self.render_outcome(outcome))
