"""Commands that hand straight through to nix: search, list, update, upgrade."""

import click

from nixbrew.cli.errors import error_boundary
from nixbrew.core.context import NixbrewContext


@click.command("search")
@click.argument("query")
@click.pass_obj
@error_boundary
def search_cmd(ctx: NixbrewContext, query: str) -> None:
    """Search nixpkgs for QUERY."""
    ctx.nix.search(query)


@click.command("list")
@click.pass_obj
@error_boundary
def list_cmd(ctx: NixbrewContext) -> None:
    """List installed packages."""
    ctx.nix.list_profile()


@click.command("update")
@click.pass_obj
@error_boundary
def update_cmd(ctx: NixbrewContext) -> None:
    """Update the nixpkgs flake input (like 'brew update')."""
    ctx.feedback.info("Updating nixpkgs flake...")
    ctx.nix.update("nixpkgs")


@click.command("upgrade")
@click.argument("package")
@click.pass_obj
@error_boundary
def upgrade_cmd(ctx: NixbrewContext, package: str) -> None:
    """Upgrade PACKAGE to the latest version in the default channel."""
    ctx.feedback.info(f"Upgrading {package}...")
    ctx.nix.upgrade(package)
