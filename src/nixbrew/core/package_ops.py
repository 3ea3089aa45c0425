"""Profile operations that combine resolution, the oracle and history.

These are the building blocks of the install, pin, rollback and uninstall
commands. They mutate the registry in memory; persisting it is left to the
surrounding registry_session.
"""

from nixbrew.core.context import NixbrewContext
from nixbrew.core.nix.parsing import find_profile_index
from nixbrew.core.nix.types import VersionQuery
from nixbrew.core.registry import PackageInfo, PackageRegistry
from nixbrew.core.resolver import Resolution


def describe_resolution(resolution: Resolution) -> str:
    """Short human explanation of how a reference was chosen."""
    if resolution.from_cache:
        return "cached resolution"
    if resolution.fallback:
        return "no channel carries this version, using latest"
    if resolution.channel is not None:
        return f"found in {resolution.channel}"
    return resolution.kind.value


def install_resolved(
    ctx: NixbrewContext,
    registry: PackageRegistry,
    package: str,
    version: str | None,
    *,
    refresh: bool = False,
) -> PackageInfo:
    """Resolve a version, add it to the profile and record the event.

    The history entry is recorded only after the oracle accepted the add.

    Returns:
        The recorded history entry
    """
    resolution = ctx.resolver.resolve(registry, package, version, refresh=refresh)
    return install_resolution(ctx, registry, package, version, resolution)


def install_resolution(
    ctx: NixbrewContext,
    registry: PackageRegistry,
    package: str,
    version: str | None,
    resolution: Resolution,
) -> PackageInfo:
    """Add an already resolved reference to the profile and record the event.

    The history entry is recorded only after the oracle accepted the add.
    """
    how = describe_resolution(resolution)
    ctx.feedback.info(f"Resolved {package} to {resolution.reference} ({how})")

    ctx.nix.add(resolution.reference)

    info = PackageInfo.create(package, version, resolution.reference, at=ctx.time.now())
    registry.record(info)
    return info


def channel_versions(ctx: NixbrewContext, package: str) -> list[tuple[str, VersionQuery]]:
    """Ask every configured channel which version of package it carries.

    Unlike semantic resolution this probes all channels; failed probes are
    included so callers can show them as unavailable.
    """
    return [(channel, ctx.nix.query_version(channel, package)) for channel in ctx.config.channels]


def remove_installed(ctx: NixbrewContext, package: str) -> str | None:
    """Remove the profile entry for a package.

    Returns:
        Index of the removed entry, or None if the package was not installed
    """
    index = find_profile_index(ctx.nix.list_installed(), package)
    if index is None:
        return None
    ctx.nix.remove(index)
    return index
