"""Production Nix implementation using subprocess.

Every command runs with the nix-command and flakes experimental features
enabled, so nixbrew works on installations that have not turned them on
globally.
"""

import logging
import subprocess
from pathlib import Path

from nixbrew.core.nix.abc import Nix
from nixbrew.core.nix.parsing import parse_eval_version, parse_profile_list
from nixbrew.core.nix.types import ProfileEntry, VersionQuery
from nixbrew.core.subprocess import run_subprocess_with_context

logger = logging.getLogger(__name__)

EXPERIMENTAL_FEATURES = (
    "--extra-experimental-features",
    "nix-command",
    "--extra-experimental-features",
    "flakes",
)


class RealNix(Nix):
    """Production implementation using the nix CLI.

    Read operations capture output; pass-through and write operations let nix
    write directly to the terminal.
    """

    def __init__(self, *, nix_binary: str = "nix", probe_timeout: float | None = None) -> None:
        """Create RealNix.

        Args:
            nix_binary: Executable to invoke
            probe_timeout: Seconds before a version probe is abandoned (None = wait forever)
        """
        self._nix_binary = nix_binary
        self._probe_timeout = probe_timeout

    def _cmd(self, *args: str) -> list[str]:
        return [self._nix_binary, *EXPERIMENTAL_FEATURES, *args]

    def _stream(self, operation_context: str, *args: str, cwd: Path | None = None) -> None:
        run_subprocess_with_context(
            self._cmd(*args),
            operation_context=operation_context,
            cwd=cwd,
            capture_output=False,
        )

    def query_version(self, channel: str, package: str) -> VersionQuery:
        attr = f"{channel}#{package}.version"
        try:
            result = run_subprocess_with_context(
                self._cmd("eval", attr, "--json"),
                operation_context=f"query version of {package} in {channel}",
                check=False,
                timeout=self._probe_timeout,
            )
        except subprocess.TimeoutExpired:
            logger.debug("Version probe for %s timed out after %ss", attr, self._probe_timeout)
            return VersionQuery(success=False, version=None)

        if result.returncode != 0:
            logger.debug(
                "Version probe for %s failed with exit code %d: %s",
                attr,
                result.returncode,
                (result.stderr or "").strip(),
            )
            return VersionQuery(success=False, version=None)

        version = parse_eval_version(result.stdout)
        if version is None:
            logger.debug("Version probe for %s returned a non-string payload", attr)
            return VersionQuery(success=False, version=None)
        return VersionQuery(success=True, version=version)

    def list_installed(self) -> list[ProfileEntry]:
        result = run_subprocess_with_context(
            self._cmd("profile", "list"),
            operation_context="list installed profile",
        )
        return parse_profile_list(result.stdout)

    def search(self, query: str) -> None:
        self._stream(f"search nixpkgs for '{query}'", "search", "nixpkgs", query)

    def list_profile(self) -> None:
        self._stream("list installed profile", "profile", "list")

    def add(self, reference: str) -> None:
        self._stream(f"add {reference} to profile", "profile", "add", reference)

    def remove(self, index: str) -> None:
        self._stream(f"remove profile entry {index}", "profile", "remove", index)

    def upgrade(self, package: str) -> None:
        self._stream(
            f"upgrade {package}", "profile", "add", f"nixpkgs#{package}", "--reinstall"
        )

    def update(self, flake_input: str) -> None:
        self._stream(f"update flake input {flake_input}", "flake", "update", flake_input)

    def flake_update_dir(self, flake_dir: Path) -> None:
        self._stream(
            f"update flake in {flake_dir}", "flake", "update", "--flake", str(flake_dir)
        )
