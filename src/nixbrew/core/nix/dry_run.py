"""No-op wrapper for Nix operations."""

from pathlib import Path

from nixbrew.cli.output import user_output
from nixbrew.core.nix.abc import Nix
from nixbrew.core.nix.types import ProfileEntry, VersionQuery


class DryRunNix(Nix):
    """No-op wrapper for Nix operations.

    Read operations are delegated to the wrapped implementation.
    Write operations print what would happen and return without executing.
    """

    def __init__(self, wrapped: Nix) -> None:
        """Initialize dry-run wrapper with a real implementation.

        Args:
            wrapped: The real Nix implementation to wrap
        """
        self._wrapped = wrapped

    def query_version(self, channel: str, package: str) -> VersionQuery:
        """Delegate read operation to wrapped implementation."""
        return self._wrapped.query_version(channel, package)

    def list_installed(self) -> list[ProfileEntry]:
        """Delegate read operation to wrapped implementation."""
        return self._wrapped.list_installed()

    def search(self, query: str) -> None:
        """Delegate read operation to wrapped implementation."""
        self._wrapped.search(query)

    def list_profile(self) -> None:
        """Delegate read operation to wrapped implementation."""
        self._wrapped.list_profile()

    def add(self, reference: str) -> None:
        user_output(f"[DRY RUN] Would run: nix profile add {reference}")

    def remove(self, index: str) -> None:
        user_output(f"[DRY RUN] Would run: nix profile remove {index}")

    def upgrade(self, package: str) -> None:
        user_output(f"[DRY RUN] Would run: nix profile add nixpkgs#{package} --reinstall")

    def update(self, flake_input: str) -> None:
        user_output(f"[DRY RUN] Would run: nix flake update {flake_input}")

    def flake_update_dir(self, flake_dir: Path) -> None:
        user_output(f"[DRY RUN] Would run: nix flake update --flake {flake_dir}")
