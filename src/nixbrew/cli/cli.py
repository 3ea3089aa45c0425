import logging
import os

import click

from nixbrew.cli.commands.cache import cache_group
from nixbrew.cli.commands.config import config_group
from nixbrew.cli.commands.create_flake import create_flake_cmd
from nixbrew.cli.commands.history import history_cmd
from nixbrew.cli.commands.install import install_cmd
from nixbrew.cli.commands.passthrough import list_cmd, search_cmd, update_cmd, upgrade_cmd
from nixbrew.cli.commands.pin import pin_cmd
from nixbrew.cli.commands.rollback import rollback_cmd
from nixbrew.cli.commands.uninstall import uninstall_cmd
from nixbrew.cli.commands.versions import versions_cmd
from nixbrew.cli.errors import error_boundary
from nixbrew.core.context import create_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags

DEBUG_ENV = "NIXBREW_DEBUG"


def configure_logging() -> None:
    """Enable debug logging when NIXBREW_DEBUG is set."""
    if os.environ.get(DEBUG_ENV):
        logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="nixbrew")
@click.option("--dry-run", is_flag=True, help="Print profile changes instead of making them.")
@click.option("-q", "--quiet", is_flag=True, help="Only print errors.")
@click.pass_context
@error_boundary
def cli(ctx: click.Context, dry_run: bool, quiet: bool) -> None:
    """A Homebrew-like CLI for Nix's imperative package management."""
    configure_logging()
    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context(dry_run=dry_run, quiet=quiet)


cli.add_command(cache_group)
cli.add_command(config_group)
cli.add_command(create_flake_cmd)
cli.add_command(history_cmd)
cli.add_command(install_cmd)
cli.add_command(list_cmd)
cli.add_command(pin_cmd)
cli.add_command(rollback_cmd)
cli.add_command(search_cmd)
cli.add_command(uninstall_cmd)
cli.add_command(update_cmd)
cli.add_command(upgrade_cmd)
cli.add_command(versions_cmd)


def main() -> None:
    """CLI entry point used by the `nixbrew` console script."""
    cli()
