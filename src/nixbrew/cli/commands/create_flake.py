import click

from nixbrew.cli.errors import error_boundary
from nixbrew.core.context import NixbrewContext
from nixbrew.core.flake import render_package_flake, write_package_flake
from nixbrew.core.registry_session import registry_session


@click.command("create-flake")
@click.argument("package")
@click.argument("version", required=False)
@click.pass_obj
@error_boundary
def create_flake_cmd(ctx: NixbrewContext, package: str, version: str | None) -> None:
    """Create a flake.nix for PACKAGE, pinned to VERSION when given.

    The flake is written to $NIXBREW_HOME/flakes/PACKAGE/flake.nix and its
    lock file generated with `nix flake update`.
    """
    with registry_session(ctx) as registry:
        resolution = ctx.resolver.resolve(registry, package, version)
        content = render_package_flake(
            package, resolution.reference, system=ctx.config.flake_system
        )

        if ctx.dry_run:
            flake_path = ctx.config.flakes_dir / package / "flake.nix"
            ctx.feedback.info(f"[DRY RUN] Would write {flake_path}")
        else:
            flake_path = write_package_flake(ctx.config.flakes_dir, package, content)
            ctx.feedback.info(f"Created flake at: {flake_path}")

        ctx.nix.flake_update_dir(flake_path.parent)

    ctx.feedback.success(f"✓ Flake for {package} ready ({resolution.reference})")
