from nixbrew.core.nix.abc import Nix
from nixbrew.core.nix.types import ProfileEntry, VersionQuery

__all__ = ["Nix", "ProfileEntry", "VersionQuery"]
