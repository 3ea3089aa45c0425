"""Application context with dependency injection."""

from dataclasses import dataclass
from pathlib import Path

from nixbrew.core.config_store import (
    ConfigStore,
    FilesystemConfigStore,
    InMemoryConfigStore,
    NixbrewConfig,
)
from nixbrew.core.nix.abc import Nix
from nixbrew.core.nix.dry_run import DryRunNix
from nixbrew.core.nix.real import RealNix
from nixbrew.core.registry_store import (
    FilesystemRegistryStore,
    InMemoryRegistryStore,
    RegistryStore,
)
from nixbrew.core.resolver import VersionResolver
from nixbrew.core.time.abc import Time
from nixbrew.core.time.real import RealTime
from nixbrew.core.user_feedback import InteractiveFeedback, SuppressedFeedback, UserFeedback


@dataclass(frozen=True)
class NixbrewContext:
    """Immutable context holding all dependencies for nixbrew operations.

    Created at CLI entry point and threaded through the application.
    Frozen to prevent accidental modification at runtime.
    """

    nix: Nix
    registry_store: RegistryStore
    config_store: ConfigStore
    time: Time
    feedback: UserFeedback
    config: NixbrewConfig
    dry_run: bool

    @property
    def resolver(self) -> VersionResolver:
        """Resolver wired to this context's oracle and configured channels."""
        return VersionResolver(
            self.nix,
            self.config.channels,
            length_mode=self.config.commit_hash_length_mode,
        )

    @staticmethod
    def for_test(
        nix: Nix | None = None,
        registry_store: RegistryStore | None = None,
        config_store: ConfigStore | None = None,
        time: Time | None = None,
        feedback: UserFeedback | None = None,
        config: NixbrewConfig | None = None,
        dry_run: bool = False,
    ) -> "NixbrewContext":
        """Create test context with optional pre-configured integration classes.

        Args:
            nix: Optional Nix implementation. If None, creates empty FakeNix.
            registry_store: Optional RegistryStore. If None, creates an empty
                InMemoryRegistryStore.
            config_store: Optional ConfigStore. If None, wraps config in InMemoryConfigStore.
            time: Optional Time implementation. If None, creates FakeTime.
            feedback: Optional UserFeedback. If None, uses InteractiveFeedback.
            config: Optional NixbrewConfig. If None, uses defaults rooted at /test/nixbrew.
            dry_run: Whether to enable dry-run mode (default False).

        Example:
            >>> nix = FakeNix(channel_versions={("nixpkgs/nixos-23.11", "hello"): "2.12.1"})
            >>> ctx = NixbrewContext.for_test(nix=nix)
        """
        from tests.fakes.time import FakeTime

        from nixbrew.core.nix.fake import FakeNix

        if nix is None:
            nix = FakeNix()

        if registry_store is None:
            registry_store = InMemoryRegistryStore()

        if config is None:
            config = NixbrewConfig(home=Path("/test/nixbrew"))

        if config_store is None:
            config_store = InMemoryConfigStore(config, home=config.home)

        if time is None:
            time = FakeTime()

        if feedback is None:
            feedback = InteractiveFeedback()

        # Apply dry-run wrapper if needed (matching production behavior)
        if dry_run:
            nix = DryRunNix(nix)

        return NixbrewContext(
            nix=nix,
            registry_store=registry_store,
            config_store=config_store,
            time=time,
            feedback=feedback,
            config=config,
            dry_run=dry_run,
        )


def create_context(
    *, dry_run: bool, quiet: bool = False, home: Path | None = None
) -> NixbrewContext:
    """Create production context with real implementations.

    Called at CLI entry point to create the context for the entire
    command execution.

    Args:
        dry_run: If True, wrap the oracle so profile writes are printed, not executed
        quiet: If True, suppress informational feedback (errors still shown)
        home: nixbrew home directory (defaults to $NIXBREW_HOME or ~/.nixbrew)

    Raises:
        RuntimeError: If the home directory cannot be determined
        ValueError: If the config file is malformed
    """
    # 1. Load config (no deps)
    config_store = FilesystemConfigStore(home)
    config = config_store.load()

    # 2. Create ops
    nix: Nix = RealNix(probe_timeout=config.probe_timeout_seconds)
    if dry_run:
        nix = DryRunNix(nix)

    return NixbrewContext(
        nix=nix,
        registry_store=FilesystemRegistryStore(config.registry_path),
        config_store=config_store,
        time=RealTime(),
        feedback=SuppressedFeedback() if quiet else InteractiveFeedback(),
        config=config,
        dry_run=dry_run,
    )
