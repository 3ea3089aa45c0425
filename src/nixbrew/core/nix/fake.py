"""Fake Nix operations for testing.

FakeNix is an in-memory implementation that accepts pre-configured state
in its constructor. Construct instances directly with keyword arguments.
"""

from pathlib import Path

from nixbrew.core.nix.abc import Nix
from nixbrew.core.nix.types import ProfileEntry, VersionQuery


class FakeNix(Nix):
    """In-memory fake implementation of the package oracle.

    This class has NO public setup methods. All state is provided via constructor
    using keyword arguments with sensible defaults (empty dicts).

    Profile mutations are applied to an in-memory profile so that a remove
    followed by list_installed reflects the change.
    """

    def __init__(
        self,
        *,
        channel_versions: dict[tuple[str, str], str] | None = None,
        failing_channels: set[str] | None = None,
        profile: list[ProfileEntry] | None = None,
        failing_adds: set[str] | None = None,
        erroring_channels: set[str] | None = None,
    ) -> None:
        """Create FakeNix with pre-configured state.

        Args:
            channel_versions: Mapping of (channel, package) -> reported version.
                Pairs not present report a failed query.
            failing_channels: Channels whose queries always fail
            profile: Initial installed profile entries
            failing_adds: References whose add() raises RuntimeError
            erroring_channels: Channels whose queries raise RuntimeError, as RealNix
                does when nix writes output that is not text
        """
        self._channel_versions = channel_versions or {}
        self._failing_channels = failing_channels or set()
        self._profile = list(profile or [])
        self._failing_adds = failing_adds or set()
        self._erroring_channels = erroring_channels or set()
        self._next_index = (
            max((int(e.index) for e in self._profile), default=-1) + 1
        )
        self._version_queries: list[tuple[str, str]] = []
        self._added: list[str] = []
        self._removed: list[str] = []
        self._upgraded: list[str] = []
        self._updated: list[str] = []
        self._searches: list[str] = []
        self._flake_updates: list[Path] = []
        self._profile_listings = 0

    @property
    def version_queries(self) -> list[tuple[str, str]]:
        """Read-only access to query_version() calls as (channel, package) tuples."""
        return self._version_queries

    @property
    def added(self) -> list[str]:
        """References passed to add()."""
        return self._added

    @property
    def removed(self) -> list[str]:
        """Indexes passed to remove()."""
        return self._removed

    @property
    def upgraded(self) -> list[str]:
        return self._upgraded

    @property
    def updated(self) -> list[str]:
        return self._updated

    @property
    def searches(self) -> list[str]:
        return self._searches

    @property
    def flake_updates(self) -> list[Path]:
        return self._flake_updates

    @property
    def profile_listings(self) -> int:
        return self._profile_listings

    @property
    def profile(self) -> list[ProfileEntry]:
        """Current in-memory profile."""
        return list(self._profile)

    def query_version(self, channel: str, package: str) -> VersionQuery:
        self._version_queries.append((channel, package))
        if channel in self._erroring_channels:
            raise RuntimeError(f"Unexpected non-text output while trying to query {channel}")
        if channel in self._failing_channels:
            return VersionQuery(success=False, version=None)
        version = self._channel_versions.get((channel, package))
        if version is None:
            return VersionQuery(success=False, version=None)
        return VersionQuery(success=True, version=version)

    def list_installed(self) -> list[ProfileEntry]:
        return list(self._profile)

    def search(self, query: str) -> None:
        self._searches.append(query)

    def list_profile(self) -> None:
        self._profile_listings += 1

    def add(self, reference: str) -> None:
        if reference in self._failing_adds:
            raise RuntimeError(f"Failed to add {reference} to profile")
        self._added.append(reference)
        self._profile.append(ProfileEntry(index=str(self._next_index), descriptor=reference))
        self._next_index += 1

    def remove(self, index: str) -> None:
        self._removed.append(index)
        self._profile = [e for e in self._profile if e.index != index]

    def upgrade(self, package: str) -> None:
        self._upgraded.append(package)

    def update(self, flake_input: str) -> None:
        self._updated.append(flake_input)

    def flake_update_dir(self, flake_dir: Path) -> None:
        self._flake_updates.append(flake_dir)
