"""
Core exception types raised by grammar normalization, registry checks, and versioning.

Provides typed exceptions for core-domain failures:
- GrammarError for unknown semantic type names or malformed identifiers.
- SchemaError for descriptor, registry, and row-shape violations.
- CyclicDependencyError when parent relations cannot be ordered.
- VersionMismatch for schema documents written by an incompatible version.

Notes:
    - This module uses only the Python standard library and has no side effects.
    - IO-layer failures (decode/encode/filesystem) live in feedio.io.errors.

Examples:
    >>> from feedio.core.errors import SchemaError
    >>> try:
    ...     raise SchemaError("table 'x.txt' already registered")
    ... except ValueError as e:
    ...     msg = str(e)
    >>> "already registered" in msg
    True
"""

from __future__ import annotations

__all__ = [
    "SchemaError",
    "CyclicDependencyError",
    "VersionMismatch",
    "GrammarError",
]


class SchemaError(ValueError):
    """Schema-level validation failure (descriptor shape, registry conflicts, row values)."""


class CyclicDependencyError(SchemaError):
    """
    Parent relations among the pending tables form a cycle.

    Attributes:
        pending (tuple[str, ...]): Table names that could not be scheduled.
    """

    def __init__(self, pending: tuple[str, ...] | list[str]) -> None:
        self.pending = tuple(pending)
        super().__init__(f"cyclic dependency among tables: {list(self.pending)!r}")


class VersionMismatch(RuntimeError):
    """Incompatible or unexpected schema document version encountered."""


class GrammarError(ValueError):
    """Unknown semantic type name or otherwise unparseable grammar value."""
