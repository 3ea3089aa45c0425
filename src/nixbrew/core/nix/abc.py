"""High-level Nix operations interface.

All calls to the `nix` CLI go through this interface.

Architecture:
- Nix: Abstract base class defining the interface
- RealNix: Production implementation using the nix CLI
- DryRunNix: Wrapper that delegates reads and prints write intentions
- FakeNix: In-memory implementation for tests
"""

from abc import ABC, abstractmethod
from pathlib import Path

from nixbrew.core.nix.types import ProfileEntry, VersionQuery


class Nix(ABC):
    """Abstract interface for the package oracle.

    All implementations (real, dry-run and fake) must implement this interface.
    This interface contains ONLY runtime operations - no test setup methods.
    """

    # Read operations

    @abstractmethod
    def query_version(self, channel: str, package: str) -> VersionQuery:
        """Ask a channel which version string it currently reports for a package.

        A failed query is reported through VersionQuery.success, not raised.

        Raises:
            RuntimeError: If the oracle produced output that is not text
        """
        ...

    @abstractmethod
    def list_installed(self) -> list[ProfileEntry]:
        """List entries of the installed profile.

        Raises:
            RuntimeError: If the profile cannot be listed
        """
        ...

    # Pass-through operations whose output streams to the terminal

    @abstractmethod
    def search(self, query: str) -> None:
        """Search nixpkgs for packages matching query."""
        ...

    @abstractmethod
    def list_profile(self) -> None:
        """Print the installed profile."""
        ...

    # Write operations

    @abstractmethod
    def add(self, reference: str) -> None:
        """Add a reference to the installed profile."""
        ...

    @abstractmethod
    def remove(self, index: str) -> None:
        """Remove a profile entry by index."""
        ...

    @abstractmethod
    def upgrade(self, package: str) -> None:
        """Reinstall a package from the default channel."""
        ...

    @abstractmethod
    def update(self, flake_input: str) -> None:
        """Update a flake input (e.g. "nixpkgs")."""
        ...

    @abstractmethod
    def flake_update_dir(self, flake_dir: Path) -> None:
        """Generate or refresh flake.lock for the flake in flake_dir."""
        ...
