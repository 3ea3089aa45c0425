"""Persistence for the package registry.

Architecture:
- RegistryStore: Abstract base class defining load/save
- FilesystemRegistryStore: Production implementation writing registry.json
- InMemoryRegistryStore: Test implementation holding serialized documents in memory
"""

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from nixbrew.core.registry import PackageRegistry, RegistryConflictError, RegistryCorruptError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileFingerprint:
    """What the registry file looked like when it was loaded."""

    exists: bool
    mtime_ns: int = 0
    size: int = 0


def fingerprint(path: Path) -> FileFingerprint:
    if not path.exists():
        return FileFingerprint(exists=False)
    stat = path.stat()
    return FileFingerprint(exists=True, mtime_ns=stat.st_mtime_ns, size=stat.st_size)


def decode_registry(content: str, *, source: str) -> PackageRegistry:
    """Decode a registry document.

    Raises:
        RegistryCorruptError: If the content is not valid registry JSON
    """
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise RegistryCorruptError(f"Registry at {source} is not valid JSON: {e}") from e

    try:
        return PackageRegistry.from_dict(data)
    except RegistryCorruptError as e:
        raise RegistryCorruptError(f"Registry at {source} is malformed: {e}") from e


def encode_registry(registry: PackageRegistry) -> str:
    return json.dumps(registry.to_dict(), indent=2) + "\n"


class RegistryStore(ABC):
    """Abstract interface for loading and saving the registry."""

    @abstractmethod
    def load(self) -> PackageRegistry:
        """Load the registry; a missing file yields an empty registry.

        Raises:
            RegistryCorruptError: If persisted data cannot be parsed
        """
        ...

    @abstractmethod
    def save(self, registry: PackageRegistry) -> None:
        """Persist the full registry.

        Raises:
            RegistryConflictError: If the stored registry changed since load()
        """
        ...

    @abstractmethod
    def path(self) -> Path:
        """Location of the persisted registry (for messages)."""
        ...


class FilesystemRegistryStore(RegistryStore):
    """Production implementation that reads/writes $NIXBREW_HOME/registry.json.

    save() writes to a temporary file in the same directory and renames it over
    the target, so a crash mid-write leaves the previous file intact. It also
    refuses to overwrite a file that another invocation wrote after our load().
    """

    def __init__(self, registry_path: Path) -> None:
        self._path = registry_path
        self._loaded_fingerprint: FileFingerprint | None = None

    def path(self) -> Path:
        return self._path

    def load(self) -> PackageRegistry:
        self._loaded_fingerprint = fingerprint(self._path)
        if not self._loaded_fingerprint.exists:
            logger.debug("No registry at %s, starting empty", self._path)
            return PackageRegistry()

        content = self._path.read_text(encoding="utf-8")
        registry = decode_registry(content, source=str(self._path))
        logger.debug(
            "Loaded registry from %s: %d packages with history, %d cached packages",
            self._path,
            len(registry.history),
            len(registry.resolved_cache),
        )
        return registry

    def save(self, registry: PackageRegistry) -> None:
        if self._loaded_fingerprint is not None:
            current = fingerprint(self._path)
            if current != self._loaded_fingerprint:
                raise RegistryConflictError(
                    f"Registry at {self._path} was modified by another nixbrew process "
                    f"since it was loaded; re-run the command"
                )

        parent = self._path.parent
        parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(prefix=".registry-", suffix=".json", dir=parent)
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(encode_registry(registry))
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self._path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise

        self._loaded_fingerprint = fingerprint(self._path)
        registry.dirty = False
        logger.debug("Saved registry to %s", self._path)


class InMemoryRegistryStore(RegistryStore):
    """Test implementation that keeps the serialized registry in memory.

    Documents go through the same JSON encoding as the filesystem store, so
    round-trip and corruption behavior match production.
    """

    def __init__(self, content: str | None = None, *, registry: PackageRegistry | None = None):
        """Create store with optional initial state.

        Args:
            content: Raw persisted document (None = no registry saved yet)
            registry: Convenience alternative to content; encoded on construction
        """
        if content is not None and registry is not None:
            msg = "Cannot specify both content and registry"
            raise ValueError(msg)
        if registry is not None:
            content = encode_registry(registry)
        self._content = content
        self._save_count = 0

    @property
    def content(self) -> str | None:
        """Current persisted document, for test assertions."""
        return self._content

    @property
    def save_count(self) -> int:
        """Number of save() calls, for test assertions."""
        return self._save_count

    def path(self) -> Path:
        return Path("/test/nixbrew/registry.json")

    def load(self) -> PackageRegistry:
        if self._content is None:
            return PackageRegistry()
        return decode_registry(self._content, source="memory")

    def save(self, registry: PackageRegistry) -> None:
        self._content = encode_registry(registry)
        self._save_count += 1
        registry.dirty = False
