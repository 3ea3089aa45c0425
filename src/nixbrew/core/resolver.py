"""Version resolution: turning a user-supplied version token into a flake reference.

Classification (first rule that applies wins):

1. no token                    -> nixpkgs#<package>
2. "23.11" (one dot, digits)   -> nixpkgs/23.11#<package>
3. commit hash ("cb82756")     -> github:NixOS/nixpkgs/cb82756#<package>
4. other dotted token          -> semantic version, resolved by probing channels
5. anything else               -> treated as a channel name

Rules 1, 2, 3 and 5 are pure string formatting. Rule 4 consults the registry
cache and, on a miss, asks the package oracle which version each configured
channel carries. The first channel whose reported version starts with the
token wins. When no channel matches, the default reference is returned, and
that fallback is cached too: later runs reuse it without probing until the
caller asks for a refresh.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Literal

from nixbrew.core.nix.abc import Nix
from nixbrew.core.registry import PackageRegistry

logger = logging.getLogger(__name__)

# Shortest token accepted as a commit hash. Whether longer tokens also count
# is controlled by the commit_hash_length_mode setting ("at-least" or "exact").
COMMIT_HASH_MIN_LENGTH = 7

HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


class TokenKind(Enum):
    DEFAULT = "default"
    CHANNEL = "channel"
    COMMIT = "commit"
    SEMANTIC = "semantic"
    CHANNEL_NAME = "channel-name"


def is_channel_version(token: str) -> bool:
    """Exactly one '.', every other character an ASCII decimal digit ("23.11")."""
    if token.count(".") != 1:
        return False
    major, minor = token.split(".")
    return bool(major) and bool(minor) and (major + minor).isascii() and (major + minor).isdigit()


def is_commit_hash(
    token: str, *, length_mode: Literal["at-least", "exact"] = "at-least"
) -> bool:
    if length_mode == "exact":
        if len(token) != COMMIT_HASH_MIN_LENGTH:
            return False
    elif len(token) < COMMIT_HASH_MIN_LENGTH:
        return False
    return all(c in HEX_DIGITS for c in token)


def classify_token(
    token: str | None, *, length_mode: Literal["at-least", "exact"] = "at-least"
) -> TokenKind:
    """Classify a version token. Total over all strings; never raises."""
    if not token:
        return TokenKind.DEFAULT
    if is_channel_version(token):
        return TokenKind.CHANNEL
    if is_commit_hash(token, length_mode=length_mode):
        return TokenKind.COMMIT
    if "." in token:
        return TokenKind.SEMANTIC
    return TokenKind.CHANNEL_NAME


def default_reference(package: str) -> str:
    return f"nixpkgs#{package}"


def channel_reference(channel: str, package: str) -> str:
    """Reference for a nixpkgs channel given by version or name ("23.11", "unstable")."""
    return f"nixpkgs/{channel}#{package}"


def commit_reference(commit: str, package: str) -> str:
    return f"github:NixOS/nixpkgs/{commit}#{package}"


def probed_channel_reference(channel: str, package: str) -> str:
    """Reference for a channel taken from the probe list ("nixpkgs/nixos-23.11")."""
    return f"{channel}#{package}"


def flake_of(reference: str) -> str:
    """Flake part of a reference: "nixpkgs/23.11#hello" -> "nixpkgs/23.11"."""
    return reference.split("#", 1)[0]


@dataclass(frozen=True)
class Resolution:
    """Result of resolving a version token."""

    reference: str
    kind: TokenKind
    from_cache: bool = False
    channel: str | None = None
    fallback: bool = False


class VersionResolver:
    """Resolves (package, version token) pairs to flake references.

    The resolver mutates only the registry's resolved-version cache; it never
    persists anything. Saving is the caller's job once the whole command has
    succeeded.
    """

    def __init__(
        self,
        nix: Nix,
        channels: Sequence[str],
        *,
        length_mode: Literal["at-least", "exact"] = "at-least",
    ) -> None:
        if not channels:
            raise ValueError("At least one channel is required for semantic resolution")
        self._nix = nix
        self._channels = tuple(channels)
        self._length_mode = length_mode

    @property
    def channels(self) -> tuple[str, ...]:
        return self._channels

    def resolve(
        self,
        registry: PackageRegistry,
        package: str,
        version: str | None,
        *,
        refresh: bool = False,
    ) -> Resolution:
        """Resolve a version token to a reference.

        Args:
            registry: Registry whose cache backs semantic resolution
            package: Package attribute name
            version: User-supplied token, or None for the default channel
            refresh: Ignore any cached semantic resolution and probe again,
                replacing the cached value with the new result

        Returns:
            Resolution with the reference and how it was obtained

        Raises:
            RuntimeError: If the oracle produced unusable output
        """
        kind = classify_token(version, length_mode=self._length_mode)
        logger.debug("Classified version %r of %s as %s", version, package, kind.value)

        match kind:
            case TokenKind.DEFAULT:
                return Resolution(reference=default_reference(package), kind=kind)
            case TokenKind.CHANNEL | TokenKind.CHANNEL_NAME:
                assert version is not None
                return Resolution(reference=channel_reference(version, package), kind=kind)
            case TokenKind.COMMIT:
                assert version is not None
                return Resolution(reference=commit_reference(version, package), kind=kind)
            case TokenKind.SEMANTIC:
                assert version is not None
                return self.resolve_semantic(registry, package, version, refresh=refresh)

    def resolve_semantic(
        self,
        registry: PackageRegistry,
        package: str,
        version: str,
        *,
        refresh: bool = False,
    ) -> Resolution:
        """Resolve a semantic version by cache lookup, then channel probes.

        Channels are probed sequentially in configured order and probing stops
        at the first match. A failed probe only disqualifies that channel.
        """
        if not refresh:
            cached = registry.cache_get(package, version)
            if cached is not None:
                logger.debug("Cache hit for %s %s: %s", package, version, cached)
                return Resolution(reference=cached, kind=TokenKind.SEMANTIC, from_cache=True)

        for channel in self._channels:
            result = self._nix.query_version(channel, package)
            if not result.success or result.version is None:
                logger.debug("Skipping %s for %s: probe failed", channel, package)
                continue

            if result.version.startswith(version):
                reference = probed_channel_reference(channel, package)
                logger.debug(
                    "%s reports %s %s, matching %s", channel, package, result.version, version
                )
                registry.cache_put(package, version, reference, replace=refresh)
                return Resolution(reference=reference, kind=TokenKind.SEMANTIC, channel=channel)

            logger.debug(
                "%s reports %s %s, not matching %s", channel, package, result.version, version
            )

        reference = default_reference(package)
        logger.debug("No channel carries %s %s, falling back to %s", package, version, reference)
        registry.cache_put(package, version, reference, replace=refresh)
        return Resolution(reference=reference, kind=TokenKind.SEMANTIC, fallback=True)
