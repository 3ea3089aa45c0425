"""Rollback command - replace the installed package with an earlier version."""

import click

from nixbrew.cli.errors import error_boundary
from nixbrew.core.context import NixbrewContext
from nixbrew.core.package_ops import install_resolution, remove_installed
from nixbrew.core.registry_session import registry_session


@click.command("rollback")
@click.argument("package")
@click.argument("version")
@click.option(
    "--refresh",
    is_flag=True,
    help="Ignore the cached resolution for VERSION and probe the channels again.",
)
@click.pass_obj
@error_boundary
def rollback_cmd(ctx: NixbrewContext, package: str, version: str, refresh: bool) -> None:
    """Roll PACKAGE back to VERSION.

    Resolves VERSION first, then removes the currently installed entry (if
    any), installs VERSION and records the rollback in the history. A failed
    resolution leaves the profile untouched. Use `nixbrew history PACKAGE`
    to see earlier versions.
    """
    ctx.feedback.info(f"Rolling back {package} to version {version}...")

    with registry_session(ctx) as registry:
        resolution = ctx.resolver.resolve(registry, package, version, refresh=refresh)
        removed = remove_installed(ctx, package)
        if removed is None:
            ctx.feedback.info(f"{package} is not currently installed, installing {version}")
        info = install_resolution(ctx, registry, package, version, resolution)

    ctx.feedback.success(f"✓ Rolled back {package} to version {version} ({info.reference})")
