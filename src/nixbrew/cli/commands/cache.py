"""Cache commands - inspect and clear resolved semantic versions.

Semantic versions that no channel carried are cached as the latest
reference and never probed again. `nixbrew cache clear` (or --refresh on
install, pin and rollback) is how to make nixbrew look again.
"""

import click
from rich.table import Table

from nixbrew.cli.errors import error_boundary
from nixbrew.cli.rendering import emit_json, print_table
from nixbrew.core.context import NixbrewContext
from nixbrew.core.registry_session import registry_session


@click.group("cache")
def cache_group() -> None:
    """Inspect or clear resolved version cache."""


@cache_group.command("show")
@click.argument("package", required=False)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format.",
)
@click.pass_obj
@error_boundary
def cache_show_cmd(ctx: NixbrewContext, package: str | None, output_format: str) -> None:
    """Show cached resolutions, for PACKAGE or for every package."""
    registry = ctx.registry_store.load()

    if package is None:
        cache = registry.resolved_cache
    else:
        cache = {package: registry.resolved_cache.get(package, {})}

    if output_format == "json":
        emit_json(cache)
        return

    rows = [
        (name, version, reference)
        for name, versions in sorted(cache.items())
        for version, reference in sorted(versions.items())
    ]
    if not rows:
        ctx.feedback.info("No cached resolutions.")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("package", no_wrap=True)
    table.add_column("version", no_wrap=True)
    table.add_column("reference", style="cyan", no_wrap=True)
    for row in rows:
        table.add_row(*row)
    print_table(table)


@cache_group.command("clear")
@click.argument("package")
@click.option("--version", "version", help="Only clear this version of PACKAGE.")
@click.pass_obj
@error_boundary
def cache_clear_cmd(ctx: NixbrewContext, package: str, version: str | None) -> None:
    """Clear cached resolutions for PACKAGE."""
    with registry_session(ctx) as registry:
        removed = registry.cache_forget(package, version)

    target = f"{package} {version}" if version else package
    if removed == 0:
        ctx.feedback.info(f"No cached resolutions for {target}.")
        return
    ctx.feedback.success(f"✓ Cleared {removed} cached resolution(s) for {target}")
