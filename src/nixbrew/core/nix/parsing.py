"""Parsing of nix CLI output.

Kept separate from RealNix so the scraping rules can be tested against
captured output without running nix.
"""

import json

from nixbrew.core.nix.types import ProfileEntry


def parse_eval_version(stdout: str) -> str | None:
    """Extract the version string from `nix eval --json <attr>.version` output.

    Returns:
        The version, or None if the payload is not a JSON string
    """
    try:
        parsed = json.loads(stdout)
    except json.JSONDecodeError:
        return None
    if not isinstance(parsed, str):
        return None
    return parsed


def parse_profile_list(stdout: str) -> list[ProfileEntry]:
    """Parse `nix profile list` output into entries.

    Lines look like "3  nixpkgs#cowsay-3.04": an integer index followed by a
    descriptor. Lines that do not start with an index are ignored.

    Example:
        >>> parse_profile_list("0 nixpkgs#hello\\n1 nixpkgs#ripgrep\\n")
        [ProfileEntry(index='0', descriptor='nixpkgs#hello'), ...]
    """
    entries: list[ProfileEntry] = []
    for line in stdout.splitlines():
        parts = line.split(maxsplit=1)
        if not parts or not parts[0].isdigit():
            continue
        descriptor = parts[1].strip() if len(parts) > 1 else ""
        entries.append(ProfileEntry(index=parts[0], descriptor=descriptor))
    return entries


def _attribute_matches(token: str, package: str) -> bool:
    if "#" not in token:
        return False
    attribute = token.split("#", 1)[1]
    # legacyPackages.x86_64-linux.hello -> hello
    last = attribute.rsplit(".", 1)[-1] if attribute.startswith("legacyPackages.") else attribute
    if last == package:
        return True
    # only a version suffix: hello-2.12.1 matches hello, git-lfs does not match git
    prefix = f"{package}-"
    return last.startswith(prefix) and last[len(prefix) : len(prefix) + 1].isdigit()


def find_profile_index(entries: list[ProfileEntry], package: str) -> str | None:
    """Find the index of the first profile entry installed for a package.

    An entry matches when one of its flake references points at the package
    attribute, whichever channel or revision it came from: "nixpkgs#hello",
    "nixpkgs/23.11#hello", "github:NixOS/nixpkgs/cb82756#hello",
    "flake:nixpkgs#legacyPackages.x86_64-linux.hello" and "nixpkgs#hello-2.12"
    all match "hello".

    Args:
        entries: Parsed profile entries
        package: Package attribute name

    Returns:
        The entry's index, or None if the package is not in the profile
    """
    for entry in entries:
        if any(_attribute_matches(token, package) for token in entry.descriptor.split()):
            return entry.index
    return None
