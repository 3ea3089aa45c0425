import click

from nixbrew.cli.errors import error_boundary
from nixbrew.core.context import NixbrewContext
from nixbrew.core.package_ops import install_resolved
from nixbrew.core.registry_session import registry_session


@click.command("pin")
@click.argument("package")
@click.argument("version")
@click.option(
    "--refresh",
    is_flag=True,
    help="Ignore the cached resolution for VERSION and probe the channels again.",
)
@click.pass_obj
@error_boundary
def pin_cmd(ctx: NixbrewContext, package: str, version: str, refresh: bool) -> None:
    """Pin PACKAGE to VERSION and record it in the history."""
    ctx.feedback.info(f"Pinning {package} to version {version}...")

    with registry_session(ctx) as registry:
        info = install_resolved(ctx, registry, package, version, refresh=refresh)

    ctx.feedback.success(f"✓ Pinned {package} to {info.reference}")
