"""Interactive template picker."""

import shutil
from pathlib import Path

import click
from prompt_toolkit import prompt
from prompt_toolkit.completion import FuzzyWordCompleter

from ..console import console
from ..paths import create_frecency_store
from ..runtime import CliState
from ..sources.errors import NitError
from ..sources.models import ResolutionReport
from ..sources.models import TemplateEntry
from ..sources.selection import select_template
from ..ui.report_display import render_outcomes
from .use import materialize_entry

DEFAULT_INLINE_LINES = 12


def menu_height(fullscreen: bool, inline: int | None) -> int:
    """Lines to reserve below the prompt for the completion menu."""
    if fullscreen:
        return max(shutil.get_terminal_size().lines - 1, 1)
    return inline or DEFAULT_INLINE_LINES


def build_choices(report: ResolutionReport) -> list[TemplateEntry]:
    """Catalog entries ordered by frecency."""
    return create_frecency_store().rank(report.catalog)


def _choose(report: ResolutionReport, answer: str, choices: list[TemplateEntry]) -> TemplateEntry:
    by_reference = {entry.reference: entry for entry in choices}
    if answer in by_reference:
        return by_reference[answer]
    return select_template(report, answer)


@click.command()
@click.option(
    "--path",
    "-p",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Directory to initialize",
)
@click.option("--fullscreen", "-f", is_flag=True, help="Let the completion menu use the whole terminal")
@click.option(
    "--inline",
    "-i",
    type=click.IntRange(min=1),
    default=None,
    help=f"Lines reserved for the completion menu [default: {DEFAULT_INLINE_LINES}]",
)
@click.pass_obj
def pick(state: CliState, path: Path, fullscreen: bool = False, inline: int | None = None):
    """Pick a template interactively and initialize it.

    Type to fuzzy-search; Tab completes. Recently and frequently used
    templates are offered first.
    """
    if fullscreen and inline is not None:
        raise click.UsageError("--fullscreen and --inline cannot be used together")
    menu_lines = menu_height(fullscreen, inline)

    try:
        report = state.resolve()
    except NitError as e:
        raise click.ClickException(str(e))

    if any(outcome.failed for outcome in report.outcomes):
        render_outcomes(console, report)

    choices = build_choices(report)
    if not choices:
        raise click.ClickException("No templates available.")

    completer = FuzzyWordCompleter(
        [entry.reference for entry in choices],
        meta_dict={entry.reference: entry.source_name for entry in choices},
    )

    try:
        answer = prompt(
            "> ",
            completer=completer,
            complete_while_typing=True,
            reserve_space_for_menu=menu_lines,
        ).strip()
    except (EOFError, KeyboardInterrupt):
        raise click.Abort()

    if not answer:
        raise click.Abort()

    try:
        entry = _choose(report, answer, choices)
        materialize_entry(entry, path)
    except NitError as e:
        raise click.ClickException(str(e))
