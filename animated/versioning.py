"""Version and naming information for the animated props library.

Single source of truth for the distribution name and version. Packaging
metadata and the logging banner both read from here.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


LIB_NAME: str = "animated-props"
LIB_IMPORT_NAME: str = "animated"
LIB_VERSION: str = "0.3.0"
LIB_DESCRIPTION: str = "Animated values, range interpolation and animated prop schemas for per-frame UI updates."


@dataclass(frozen=True)
class VersionInfo:
    major: int
    minor: int
    patch: int

    def to_tuple(self) -> Tuple[int, int, int]:
        return (self.major, self.minor, self.patch)


def parse_version(version_str: str = LIB_VERSION) -> VersionInfo:
    """Parse a ``MAJOR.MINOR.PATCH`` string.

    Missing components default to zero. Anything that is not an integer
    raises ``ValueError`` so a malformed release string is caught in tests
    rather than shipped.
    """
    parts = [int(p) for p in str(version_str).split(".")[:3]]
    while len(parts) < 3:
        parts.append(0)
    return VersionInfo(parts[0], parts[1], parts[2])


def get_version_string() -> str:
    """Return ``"<name> <version>"`` for log banners."""
    return f"{LIB_NAME} {LIB_VERSION}"


__all__ = [
    "LIB_NAME",
    "LIB_IMPORT_NAME",
    "LIB_VERSION",
    "LIB_DESCRIPTION",
    "VersionInfo",
    "parse_version",
    "get_version_string",
]
