"""Value types returned by the package oracle."""

from dataclasses import dataclass
from typing import NamedTuple


class VersionQuery(NamedTuple):
    """Outcome of asking a channel which version it carries for a package.

    version is None when the query failed or the channel reported something
    other than a version string.
    """

    success: bool
    version: str | None


@dataclass(frozen=True)
class ProfileEntry:
    """One element of the user's installed profile."""

    index: str
    descriptor: str
