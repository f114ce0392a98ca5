"""Render resolution reports with Rich tables."""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..sources.models import OutcomeStatus
from ..sources.models import ResolutionReport
from ..sources.models import ResolutionStatus

_STATUS_STYLES = {
    OutcomeStatus.OK: "green",
    OutcomeStatus.EMPTY_AFTER_FILTER: "yellow",
    OutcomeStatus.FETCH_FAILED: "red",
}


def render_catalog(console: Console, report: ResolutionReport) -> None:
    if not report.catalog:
        console.print("[dim]No templates available.[/dim]")
        return

    table = Table(title="Templates")
    table.add_column("Template", style="cyan")
    table.add_column("Source", style="green")
    table.add_column("URI", style="dim")

    for entry in report.catalog:
        table.add_row(escape(entry.identifier), escape(entry.source_name), escape(entry.uri))

    console.print(table)


def render_outcomes(console: Console, report: ResolutionReport) -> None:
    table = Table(title="Sources")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Source", style="green")
    table.add_column("Status")
    table.add_column("Details")

    for outcome in report.outcomes:
        style = _STATUS_STYLES[outcome.status]
        details = outcome.describe()
        if outcome.requested_but_missing:
            details += f"; not offered: {', '.join(outcome.requested_but_missing)}"
        table.add_row(
            str(outcome.position),
            escape(outcome.source.label),
            f"[{style}]{outcome.status.value}[/{style}]",
            escape(details),
        )

    console.print(table)


def render_shadowed(console: Console, report: ResolutionReport) -> None:
    if not report.shadowed:
        return

    console.print("\n[bold]Shadowed templates[/bold] [dim](hidden by an earlier source)[/dim]")
    for shadow in report.shadowed:
        console.print(
            f"  • {escape(shadow.identifier)} [dim]from[/dim] {escape(shadow.source_name)} → {escape(shadow.winner)}"
        )


def render_report(console: Console, report: ResolutionReport, details: bool = False) -> None:
    """Catalog, plus whatever explains missing or hidden templates."""
    render_catalog(console, report)

    needs_outcomes = details or any(
        outcome.status != OutcomeStatus.OK or outcome.requested_but_missing for outcome in report.outcomes
    )
    if needs_outcomes:
        console.print()
        render_outcomes(console, report)

    render_shadowed(console, report)

    if report.status == ResolutionStatus.ALL_SOURCES_FAILED:
        console.print("\n[red]✗ Every template source failed to fetch.[/red]")
