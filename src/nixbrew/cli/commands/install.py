"""Install command - resolve a version and add it to the profile."""

import click

from nixbrew.cli.errors import error_boundary
from nixbrew.core.context import NixbrewContext
from nixbrew.core.package_ops import install_resolved
from nixbrew.core.registry_session import registry_session


@click.command("install")
@click.argument("package")
@click.argument("version", required=False)
@click.option(
    "--refresh",
    is_flag=True,
    help="Ignore the cached resolution for VERSION and probe the channels again.",
)
@click.pass_obj
@error_boundary
def install_cmd(ctx: NixbrewContext, package: str, version: str | None, refresh: bool) -> None:
    """Install PACKAGE from nixpkgs.

    VERSION may be a channel ("23.11", "unstable"), a nixpkgs commit hash
    ("cb82756") or a package version ("14.1.0"). Without VERSION the latest
    package from the default channel is installed.
    """
    suffix = f" version {version}" if version else ""
    ctx.feedback.info(f"Installing {package}{suffix}...")

    with registry_session(ctx) as registry:
        info = install_resolved(ctx, registry, package, version, refresh=refresh)

    ctx.feedback.success(f"✓ Installed {package} from {info.reference}")
