"""Package registry: install history and resolved-version cache.

The registry is a plain value. It is loaded at the start of a command through
a RegistryStore, mutated in memory by the command, and written back in full at
the end. Nothing here touches the filesystem.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


class RegistryCorruptError(Exception):
    """Persisted registry data could not be parsed.

    Raised instead of returning an empty registry so that a damaged file is
    never silently overwritten.
    """


class RegistryConflictError(Exception):
    """The registry file changed on disk between load and save."""


@dataclass(frozen=True)
class PackageInfo:
    """One install, pin or rollback event."""

    name: str
    version: str | None
    reference: str
    installed_at: str
    lock: str | None = None

    @staticmethod
    def create(
        name: str, version: str | None, reference: str, *, at: datetime
    ) -> "PackageInfo":
        """Create an event stamped with the given instant in ISO-8601 form."""
        if not name:
            raise ValueError("Package name must not be empty")
        return PackageInfo(
            name=name,
            version=version,
            reference=reference,
            installed_at=at.isoformat(),
            lock=None,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "reference": self.reference,
            "installed_at": self.installed_at,
            "lock": self.lock,
        }

    @staticmethod
    def from_dict(data: Any) -> "PackageInfo":
        """Parse one history entry.

        Raises:
            RegistryCorruptError: If a required field is missing or has the wrong type
        """
        if not isinstance(data, dict):
            kind = type(data).__name__
            raise RegistryCorruptError(f"History entry must be an object, got {kind}")

        for key in ("name", "reference", "installed_at"):
            if not isinstance(data.get(key), str):
                raise RegistryCorruptError(f"History entry field '{key}' must be a string")
        for key in ("version", "lock"):
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise RegistryCorruptError(f"History entry field '{key}' must be a string or null")

        return PackageInfo(
            name=data["name"],
            version=data.get("version"),
            reference=data["reference"],
            installed_at=data["installed_at"],
            lock=data.get("lock"),
        )


@dataclass
class PackageRegistry:
    """Process-local registry state.

    history is append-only and kept in event order. resolved_cache is
    write-once per (package, version) unless a caller asks to replace.
    """

    history: dict[str, list[PackageInfo]] = field(default_factory=dict)
    resolved_cache: dict[str, dict[str, str]] = field(default_factory=dict)
    dirty: bool = field(default=False, compare=False)

    def record(self, info: PackageInfo) -> None:
        self.history.setdefault(info.name, []).append(info)
        self.dirty = True

    def history_of(self, name: str) -> list[PackageInfo] | None:
        entries = self.history.get(name)
        if entries is None:
            return None
        return list(entries)

    def cache_get(self, name: str, version: str) -> str | None:
        return self.resolved_cache.get(name, {}).get(version)

    def cache_put(self, name: str, version: str, reference: str, *, replace: bool = False) -> str:
        """Cache a resolved reference.

        An existing entry is kept unless replace is True.

        Returns:
            The reference now cached for (name, version)
        """
        versions = self.resolved_cache.setdefault(name, {})
        existing = versions.get(version)
        if existing is not None and not replace:
            return existing
        if existing != reference:
            versions[version] = reference
            self.dirty = True
        return reference

    def cache_forget(self, name: str, version: str | None = None) -> int:
        """Drop cached resolutions for a package.

        Args:
            name: Package name
            version: Single version to drop; None drops every version of the package

        Returns:
            Number of cache entries removed
        """
        versions = self.resolved_cache.get(name)
        if versions is None:
            return 0

        if version is None:
            removed = len(versions)
            del self.resolved_cache[name]
        elif version in versions:
            removed = 1
            del versions[version]
            if not versions:
                del self.resolved_cache[name]
        else:
            removed = 0

        if removed:
            self.dirty = True
        return removed

    def to_dict(self) -> dict[str, Any]:
        return {
            "history": {
                name: [info.to_dict() for info in entries] for name, entries in self.history.items()
            },
            "resolved_cache": {
                name: dict(versions) for name, versions in self.resolved_cache.items()
            },
        }

    @staticmethod
    def from_dict(data: Any) -> "PackageRegistry":
        """Parse a decoded registry document.

        Raises:
            RegistryCorruptError: If the document does not match the registry schema
        """
        if not isinstance(data, dict):
            raise RegistryCorruptError("Registry root must be an object")

        history_raw = data.get("history", {})
        cache_raw = data.get("resolved_cache", {})
        if not isinstance(history_raw, dict):
            raise RegistryCorruptError("'history' must be an object")
        if not isinstance(cache_raw, dict):
            raise RegistryCorruptError("'resolved_cache' must be an object")

        history: dict[str, list[PackageInfo]] = {}
        for name, entries in history_raw.items():
            if not isinstance(entries, list):
                raise RegistryCorruptError(f"History for '{name}' must be a list")
            history[name] = [PackageInfo.from_dict(entry) for entry in entries]

        resolved_cache: dict[str, dict[str, str]] = {}
        for name, versions in cache_raw.items():
            if not isinstance(versions, dict) or not all(
                isinstance(v, str) for v in versions.values()
            ):
                raise RegistryCorruptError(f"Cache for '{name}' must map versions to strings")
            resolved_cache[name] = dict(versions)

        return PackageRegistry(history=history, resolved_cache=resolved_cache)
