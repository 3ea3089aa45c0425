"""Registry session: load at command entry, save at exit.

Provides a context manager so every command that touches the registry gets
the same lifecycle without repeating load/save calls.
"""

import logging
from collections.abc import Generator
from contextlib import contextmanager

from nixbrew.core.context import NixbrewContext
from nixbrew.core.registry import PackageRegistry

logger = logging.getLogger(__name__)


@contextmanager
def registry_session(ctx: NixbrewContext) -> Generator[PackageRegistry]:
    """Load the registry and save it back if the command changed it.

    The registry is saved only when the with block exits normally. If the
    block raises (a failed nix call, Ctrl-C), nothing is written, so an
    interrupted command never persists partial state. In dry-run mode the
    registry is never written.

    Example:
        with registry_session(ctx) as registry:
            resolution = ctx.resolver.resolve(registry, "hello", "2.12")
            ctx.nix.add(resolution.reference)
        # registry saved here if the cache or history changed

    Raises:
        RegistryCorruptError: If the persisted registry cannot be parsed
        RegistryConflictError: If another process wrote the registry meanwhile
    """
    registry = ctx.registry_store.load()

    yield registry

    if not registry.dirty:
        return
    if ctx.dry_run:
        logger.debug("Dry run: not saving registry changes")
        return
    ctx.registry_store.save(registry)
