import click

from nixbrew.cli.errors import error_boundary, fail
from nixbrew.cli.output import machine_output
from nixbrew.core.config_store import render_config
from nixbrew.core.context import NixbrewContext


@click.group("config")
def config_group() -> None:
    """Inspect nixbrew configuration."""


@config_group.command("show")
@click.pass_obj
@error_boundary
def config_show_cmd(ctx: NixbrewContext) -> None:
    """Print the effective configuration as TOML."""
    source = ctx.config_store.path() if ctx.config_store.exists() else "defaults"
    ctx.feedback.info(f"# Source: {source}")
    machine_output(render_config(ctx.config), nl=False)


@config_group.command("init")
@click.option("--force", is_flag=True, help="Overwrite an existing config file.")
@click.pass_obj
@error_boundary
def config_init_cmd(ctx: NixbrewContext, force: bool) -> None:
    """Write the effective configuration to the config file."""
    if ctx.config_store.exists() and not force:
        fail(f"Config already exists at {ctx.config_store.path()} (use --force to overwrite)")

    if ctx.dry_run:
        ctx.feedback.info(f"[DRY RUN] Would write {ctx.config_store.path()}")
        return

    ctx.config_store.save(ctx.config)
    ctx.feedback.success(f"✓ Wrote {ctx.config_store.path()}")
