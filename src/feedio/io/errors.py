"""
Custom exceptions for the feedio.io module.

Purpose
- Provide IO-layer specific error types that map cleanly to responsibilities in feedio.io.
- Keep feedio.core as the source of truth for schema/grammar/versioning errors
  (see feedio.core.errors).

Boundaries
- FeedError: catch-all base for IO-layer failures.
  - CodecError: invalid codec arguments or a value that cannot be encoded.
    - FieldParseError: a non-duration field failed to parse; aborts that file's decode.
  - RowConflictError: a row violates a table constraint (duplicate primary key).
    Decoders absorb it and record the row as dropped.
  - SchemaDocumentError: the persisted schema document is malformed.
  - FeedWriteError: saving a feed failed at the filesystem/archive level.

Notes
- These exceptions do not perform any IO and are stdlib-only.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from feedio.core.grammar import SemanticType

    from .read import DecodeReport


class FeedError(Exception):
    """
    Base class for IO-related errors in feedio.io.

    Notes:
        Distinct from feedio.core errors (SchemaError, VersionMismatch, ...).
    """


class CodecError(FeedError, ValueError):
    """
    Raised for invalid codec usage.

    Examples:
        - A delimiter that is not exactly one character.
        - A non-finite decimal handed to the encoder.
    """


class FieldParseError(CodecError):
    """
    Raised when a field value cannot be converted to its column's semantic type.

    Attributes:
        table (str): Table being decoded.
        line (int): 1-based physical line number of the record in the source.
        column (str): Column name.
        value (str): Raw field text.
        semantic_type (SemanticType): Expected type.
        report (DecodeReport | None): Partial decode report; rows appended before
            the failure stay in the table.
    """

    def __init__(
        self,
        table: str,
        line: int,
        column: str,
        value: str,
        semantic_type: SemanticType,
        cause: Any = None,
    ) -> None:
        self.table = table
        self.line = line
        self.column = column
        self.value = value
        self.semantic_type = semantic_type
        self.report: DecodeReport | None = None
        detail = f": {cause}" if cause else ""
        super().__init__(
            f"{table} line {line}: cannot parse {value!r} in column {column!r} "
            f"as {semantic_type.value}{detail}"
        )


class RowConflictError(FeedError):
    """
    Raised when appending a row violates a table constraint.

    Attributes:
        table (str): Table name.
        key (tuple): Conflicting primary key values.
    """

    def __init__(self, table: str, key: tuple[Any, ...]) -> None:
        self.table = table
        self.key = key
        super().__init__(f"duplicate primary key {key!r} in table {table!r}")


class SchemaDocumentError(FeedError):
    """Raised when a schema document cannot be parsed or validated."""


class FeedWriteError(FeedError):
    """
    Raised when saving a feed fails.

    Notes:
        There is no rollback: files or entries written before the failure remain.
    """
