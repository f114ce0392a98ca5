"""Instantiate a template by identifier."""

import logging
from pathlib import Path

import click
from rich.markup import escape

from ..console import console
from ..frecency import frecency_key
from ..paths import create_frecency_store
from ..paths import create_materializer
from ..runtime import CliState
from ..sources.errors import NitError
from ..sources.models import TemplateEntry
from ..sources.selection import select_template

logger = logging.getLogger(__name__)


def materialize_entry(entry: TemplateEntry, target: Path) -> None:
    """Instantiate ``entry`` into ``target`` and record the use.

    Raises:
        MaterializeError: Instantiation failed (nothing is recorded)
    """
    create_materializer().materialize(entry, target)
    create_frecency_store().record(frecency_key(entry))
    console.print(
        f"[green]✓[/green] Initialized [cyan]{escape(entry.identifier)}[/cyan] from {escape(entry.source_name)}"
    )
    console.print(f"  [dim]{escape(entry.reference)} → {escape(str(target))}[/dim]")


@click.command()
@click.argument("identifier")
@click.option(
    "--path",
    "-p",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Directory to initialize",
)
@click.pass_obj
def use(state: CliState, identifier: str, path: Path):
    """Initialize a project from template IDENTIFIER.

    Examples:

        \b
        nit use rust
        nit use python --path ./my-project
    """
    try:
        report = state.resolve()
        entry = select_template(report, identifier)
        materialize_entry(entry, path)
    except NitError as e:
        logger.debug(f"use {identifier} failed: {e}")
        raise click.ClickException(str(e))
