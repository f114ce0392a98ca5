"""Catalog listing command."""

import click

from ..console import console
from ..runtime import CliState
from ..sources.errors import NitError
from ..ui.report_display import render_report


@click.command(name="list")
@click.option("--details", "-d", is_flag=True, help="Always show per-source outcomes")
@click.pass_obj
def list_cmd(state: CliState, details: bool):
    """List the templates available from all configured sources.

    Templates offered by more than one source belong to the source listed
    first in the config; the others are shown as shadowed.

    Examples:

        \b
        # List templates
        nit list

        \b
        # Also show what each source contributed
        nit list --details
    """
    try:
        report = state.resolve()
    except NitError as e:
        raise click.ClickException(str(e))

    render_report(console, report, details=details)

    if report.all_sources_failed:
        raise SystemExit(1)
