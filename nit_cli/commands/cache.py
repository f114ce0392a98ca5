"""Cache management commands.

nit caches collection listings (so resolution does not run ``nix flake
show`` every time) and template usage history for the picker.
"""

import click

from ..console import console
from ..paths import create_fetcher
from ..paths import create_frecency_store
from ..paths import get_cache_dir


@click.group(invoke_without_command=True)
@click.pass_context
def cache(ctx: click.Context):
    """Manage the nit cache.

    Run with --re-cache (``nit -r list``) to refresh listings without
    clearing usage history.
    """
    if ctx.invoked_subcommand is None:
        click.echo("\n" + ctx.get_help())
        ctx.exit()


@cache.command(name="path")
def cache_path():
    """Show the cache directory path."""
    cache_dir = get_cache_dir()
    console.print(f"[cyan]{cache_dir}[/cyan]")

    if cache_dir.exists():
        console.print("[dim]Status: exists[/dim]")
    else:
        console.print("[dim]Status: not created yet[/dim]")


@cache.command(name="clear")
@click.option("--history", is_flag=True, help="Also forget template usage history")
def cache_clear(history: bool):
    """Delete cached collection listings."""
    if create_fetcher().clear():
        console.print("[green]✓[/green] Cleared collection listings")
    else:
        console.print("[dim]No cached listings.[/dim]")

    if history:
        if create_frecency_store().clear():
            console.print("[green]✓[/green] Cleared usage history")
        else:
            console.print("[dim]No usage history.[/dim]")
