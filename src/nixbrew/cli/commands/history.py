"""History command - show recorded installs, pins and rollbacks of a package."""

import click

from nixbrew.cli.errors import error_boundary
from nixbrew.cli.rendering import (
    channel_versions_json,
    channel_versions_table,
    emit_json,
    history_table,
    print_table,
)
from nixbrew.core.context import NixbrewContext
from nixbrew.core.package_ops import channel_versions


@click.command("history")
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
def history_cmd(ctx: NixbrewContext, package: str, output_format: str) -> None:
    """Show the history of PACKAGE.

    When nothing has been recorded for PACKAGE, shows the versions the
    configured channels currently carry instead.
    """
    # Read-only: load directly, nothing to save
    registry = ctx.registry_store.load()
    entries = registry.history_of(package)

    if output_format == "json":
        if entries:
            emit_json({"package": package, "history": [e.to_dict() for e in entries]})
        else:
            results = channel_versions(ctx, package)
            emit_json(
                {"package": package, "history": [], "channels": channel_versions_json(results)}
            )
        return

    if entries:
        ctx.feedback.info(f"History for {package}:")
        print_table(history_table(entries))
        return

    ctx.feedback.info(f"No history found for package: {package}")
    ctx.feedback.info("Searching for available versions...")
    print_table(channel_versions_table(channel_versions(ctx, package)))
