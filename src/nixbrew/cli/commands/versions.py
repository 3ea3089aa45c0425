import click

from nixbrew.cli.errors import error_boundary
from nixbrew.cli.rendering import (
    channel_versions_json,
    channel_versions_table,
    emit_json,
    print_table,
)
from nixbrew.core.context import NixbrewContext
from nixbrew.core.package_ops import channel_versions


@click.command("versions")
@click.argument("package")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format.",
)
@click.pass_obj
@error_boundary
def versions_cmd(ctx: NixbrewContext, package: str, output_format: str) -> None:
    """List the versions of PACKAGE carried by each configured channel."""
    if output_format == "text":
        ctx.feedback.info(f"Listing versions of {package}...")

    results = channel_versions(ctx, package)

    if output_format == "json":
        emit_json({"package": package, "channels": channel_versions_json(results)})
        return

    print_table(channel_versions_table(results))
