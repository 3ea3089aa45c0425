import click

from nixbrew.cli.errors import error_boundary, fail
from nixbrew.core.context import NixbrewContext
from nixbrew.core.package_ops import remove_installed


@click.command("uninstall")
@click.argument("package")
@click.pass_obj
@error_boundary
def uninstall_cmd(ctx: NixbrewContext, package: str) -> None:
    """Uninstall PACKAGE from the profile."""
    ctx.feedback.info(f"Finding package '{package}' to uninstall...")

    index = remove_installed(ctx, package)
    if index is None:
        fail(f"Package '{package}' not found in profile.")

    ctx.feedback.success(f"✓ Uninstalled {package} (index: {index})")
