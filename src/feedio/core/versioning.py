"""
Schema document version metadata and helpers.

Exposes the version (DOCUMENT_V) embedded in every persisted schema document and
provides compatibility checks used when a document is merged into a registry.
This module is zero-IO.

Notes:
    - Major bumps signal incompatible document layouts; minor bumps are additive.
    - Documents are accepted when their major component matches DOCUMENT_V.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .errors import VersionMismatch

__all__ = [
    "SchemaVersion",
    "DOCUMENT_V",
    "is_compatible",
    "parse_version",
    "ensure_compatible",
]

_VERSION_RE = re.compile(r"^(\d+)\.(\d+)$")


@dataclass(frozen=True)
class SchemaVersion:
    """
    Immutable two-part version for persisted schema documents.

    Attributes:
        major (int): Non-negative major component signalling breaking changes.
        minor (int): Non-negative minor component for additive changes.

    Raises:
        ValueError: If any component is negative.
    """

    major: int
    minor: int

    def __post_init__(self) -> None:
        if self.major < 0:
            raise ValueError(f"SchemaVersion major must be non-negative, got {self.major}")
        if self.minor < 0:
            raise ValueError(f"SchemaVersion minor must be non-negative, got {self.minor}")

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"


DOCUMENT_V = SchemaVersion(1, 0)


def parse_version(text: str) -> SchemaVersion:
    """
    Parse a "<major>.<minor>" string.

    Raises:
        VersionMismatch: If the text is not a two-part numeric version.

    Examples:
        >>> parse_version("1.0")
        SchemaVersion(major=1, minor=0)
    """
    match = _VERSION_RE.match(text.strip())
    if match is None:
        raise VersionMismatch(f"malformed schema document version {text!r}")
    return SchemaVersion(int(match.group(1)), int(match.group(2)))


def is_compatible(ver: SchemaVersion) -> bool:
    """
    Check whether a document version can be merged by this release.

    Returns:
        bool: True if ver shares the major component with DOCUMENT_V.

    Examples:
        >>> is_compatible(DOCUMENT_V)
        True
        >>> is_compatible(SchemaVersion(DOCUMENT_V.major + 1, 0))
        False
    """
    return ver.major == DOCUMENT_V.major


def ensure_compatible(ver: SchemaVersion) -> None:
    """Raise VersionMismatch unless ``ver`` is compatible with DOCUMENT_V."""
    if not is_compatible(ver):
        raise VersionMismatch(
            f"schema document version {ver} is incompatible with supported {DOCUMENT_V}"
        )
