"""Configuration data structures and loading.

Provides immutable configuration loaded eagerly at the CLI entry point from
$NIXBREW_HOME/config.toml (default ~/.nixbrew/config.toml). The file is
optional: every field has a default.
"""

import os
import tomllib
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

import tomlkit

CommitHashLengthMode = Literal["at-least", "exact"]

DEFAULT_CHANNELS: tuple[str, ...] = (
    "nixpkgs/nixos-unstable",
    "nixpkgs/nixos-23.11",
    "nixpkgs/nixos-23.05",
)
DEFAULT_FLAKE_SYSTEM = "x86_64-linux"
NIXBREW_HOME_ENV = "NIXBREW_HOME"


def nixbrew_home() -> Path:
    """Get the per-user nixbrew directory.

    Honors $NIXBREW_HOME, otherwise ~/.nixbrew.

    Raises:
        RuntimeError: If the home directory cannot be determined
    """
    override = os.environ.get(NIXBREW_HOME_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".nixbrew"


@dataclass(frozen=True)
class NixbrewConfig:
    """Immutable configuration data.

    Loaded once at CLI entry point and stored in NixbrewContext.
    """

    home: Path
    channels: tuple[str, ...] = DEFAULT_CHANNELS
    commit_hash_length_mode: CommitHashLengthMode = "at-least"
    probe_timeout_seconds: float | None = None
    flake_system: str = DEFAULT_FLAKE_SYSTEM

    @property
    def registry_path(self) -> Path:
        return self.home / "registry.json"

    @property
    def flakes_dir(self) -> Path:
        return self.home / "flakes"

    @property
    def config_path(self) -> Path:
        return self.home / "config.toml"


def parse_config(data: dict[str, object], *, home: Path, source: Path) -> NixbrewConfig:
    """Build a NixbrewConfig from decoded TOML data.

    Args:
        data: Decoded TOML document
        home: nixbrew home directory the config belongs to
        source: Config path, for error messages

    Raises:
        ValueError: If a known key has the wrong type or value
    """
    channels_raw = data.get("channels", list(DEFAULT_CHANNELS))
    if not isinstance(channels_raw, list) or not all(isinstance(c, str) for c in channels_raw):
        raise ValueError(f"'channels' must be a list of strings in {source}")
    if not channels_raw:
        raise ValueError(f"'channels' must not be empty in {source}")

    mode = data.get("commit_hash_length_mode", "at-least")
    if mode not in ("at-least", "exact"):
        raise ValueError(
            f"'commit_hash_length_mode' must be \"at-least\" or \"exact\" in {source}, got {mode!r}"
        )

    timeout = data.get("probe_timeout_seconds")
    if timeout is not None:
        if isinstance(timeout, bool) or not isinstance(timeout, int | float) or timeout <= 0:
            raise ValueError(f"'probe_timeout_seconds' must be a positive number in {source}")
        timeout = float(timeout)

    system = data.get("flake_system", DEFAULT_FLAKE_SYSTEM)
    if not isinstance(system, str) or not system:
        raise ValueError(f"'flake_system' must be a non-empty string in {source}")

    return NixbrewConfig(
        home=home,
        channels=tuple(channels_raw),
        commit_hash_length_mode=mode,
        probe_timeout_seconds=timeout,
        flake_system=system,
    )


def render_config(config: NixbrewConfig) -> str:
    """Render a config as a commented TOML document."""
    doc = tomlkit.document()
    doc.add(tomlkit.comment("nixbrew configuration"))
    doc.add(tomlkit.comment("Channels probed, in order, when resolving a semantic version"))
    channels = tomlkit.array()
    channels.extend(config.channels)
    channels.multiline(True)
    doc["channels"] = channels
    doc.add(tomlkit.nl())
    doc.add(tomlkit.comment('"at-least" or "exact": how the commit hash length rule applies'))
    doc["commit_hash_length_mode"] = config.commit_hash_length_mode
    if config.probe_timeout_seconds is not None:
        doc["probe_timeout_seconds"] = config.probe_timeout_seconds
    doc["flake_system"] = config.flake_system
    return tomlkit.dumps(doc)


class ConfigStore(ABC):
    """Abstract interface for configuration access.

    Provides dependency injection for config access, enabling in-memory
    implementations for tests without touching filesystem.
    """

    @abstractmethod
    def exists(self) -> bool:
        """Check if a config file exists."""
        ...

    @abstractmethod
    def load(self) -> NixbrewConfig:
        """Load config, falling back to defaults when no file exists.

        Raises:
            ValueError: If the config file is malformed
        """
        ...

    @abstractmethod
    def save(self, config: NixbrewConfig) -> None:
        """Persist config."""
        ...

    @abstractmethod
    def path(self) -> Path:
        """Get the path to the config file (for error messages and debugging)."""
        ...


class FilesystemConfigStore(ConfigStore):
    """Production implementation that reads/writes $NIXBREW_HOME/config.toml."""

    def __init__(self, home: Path | None = None) -> None:
        self._home = home if home is not None else nixbrew_home()

    def exists(self) -> bool:
        return self.path().exists()

    def load(self) -> NixbrewConfig:
        config_path = self.path()
        if not config_path.exists():
            return NixbrewConfig(home=self._home)

        try:
            data = tomllib.loads(config_path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Malformed config file {config_path}: {e}") from e
        return parse_config(data, home=self._home, source=config_path)

    def save(self, config: NixbrewConfig) -> None:
        config_path = self.path()
        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
        except PermissionError:
            raise PermissionError(
                f"Cannot create directory: {config_path.parent}\n"
                f"Check permissions on your home directory."
            ) from None
        config_path.write_text(render_config(config), encoding="utf-8")

    def path(self) -> Path:
        return self._home / "config.toml"


class InMemoryConfigStore(ConfigStore):
    """Test implementation that stores config in memory without touching filesystem."""

    def __init__(self, config: NixbrewConfig | None = None, *, home: Path | None = None) -> None:
        """Initialize in-memory config store.

        Args:
            config: Initial config state (None = no config file, defaults apply)
            home: Home directory used for defaults when config is None
        """
        self._config = config
        self._home = home if home is not None else Path("/test/nixbrew")
        self._saved: list[NixbrewConfig] = []

    @property
    def saved_configs(self) -> list[NixbrewConfig]:
        """Configs passed to save(), for test assertions."""
        return self._saved

    def exists(self) -> bool:
        return self._config is not None

    def load(self) -> NixbrewConfig:
        if self._config is None:
            return NixbrewConfig(home=self._home)
        return self._config

    def save(self, config: NixbrewConfig) -> None:
        self._config = config
        self._saved.append(config)

    def path(self) -> Path:
        return self._home / "config.toml"
