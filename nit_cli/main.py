"""nit - launch project scaffolds from Nix flake template collections."""

import logging
from pathlib import Path

import click

from .commands.cache import cache as cache_group
from .commands.catalog import list_cmd
from .commands.pick import pick
from .commands.use import use
from .logging_setup import init_console_logging
from .logging_setup import init_json_logging
from .runtime import CliState

logger = logging.getLogger(__name__)


@click.group(invoke_without_command=True)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: ~/.config/nix-nit/config.toml)",
)
@click.option(
    "--re-cache",
    "-r",
    "refresh",
    is_flag=True,
    help="Re-fetch collection listings (run after changing the config)",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging on stderr")
@click.option("--fullscreen", "-f", is_flag=True, help="Picker: let the completion menu use the whole terminal")
@click.option("--inline", "-i", type=click.IntRange(min=1), default=None, help="Picker: lines reserved for the menu")
@click.version_option(package_name="nit-cli")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Path | None,
    refresh: bool,
    verbose: bool,
    fullscreen: bool,
    inline: int | None,
):
    """Launch project scaffolds from Nix flake template collections.

    Without a command, opens the interactive picker.

    The config lives at ~/.config/nix-nit/config.toml:

        \b
        [[template]]
        name = "official"               # optional
        uri = "github:NixOS/templates"
        templates = ["rust"]            # optional, default: all templates
        excludes = ["go"]               # optional
    """
    init_json_logging()
    if verbose:
        init_console_logging()

    ctx.obj = CliState(config_path=config_path, refresh=refresh)
    logger.debug(f"nit invoked with {ctx.obj}")

    if ctx.invoked_subcommand is None:
        ctx.invoke(pick, fullscreen=fullscreen, inline=inline)


cli.add_command(list_cmd)
cli.add_command(use)
cli.add_command(pick)
cli.add_command(cache_group)


def main() -> None:
    """Entry point for the ``nit`` script."""
    cli()


if __name__ == "__main__":
    main()
