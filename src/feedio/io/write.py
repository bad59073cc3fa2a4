"""
Delimited-text encoding of an in-memory Table.

Format
- One header line: column names in declared order, joined by the delimiter.
- One line per row; null cells are empty fields; values are formatted per
  column type (feedio.io.values).
- Only integer and text values that contain the delimiter or a double quote are
  quote-enclosed, with embedded quotes doubled. Nothing else is ever quoted,
  header names included.
- Every line ends with ``lineterminator`` (platform line separator by default).

Notes
- The caller's stream is flushed but never closed.
"""

from __future__ import annotations

import io
import os
from typing import IO, Any

from feedio.core.grammar import ColumnDescriptor

from .errors import CodecError
from .read import check_delimiter
from .table import Table
from .values import QUOTABLE_TYPES, format_value

__all__ = ["encode", "format_field"]


def format_field(column: ColumnDescriptor, value: Any, delimiter: str = ",") -> str:
    """
    Format a single cell, applying quote-enclosure where required.

    Examples:
        >>> from feedio.core.grammar import ColumnDescriptor
        >>> format_field(ColumnDescriptor("name"), 'say "hi", then leave')
        '"say ""hi"", then leave"'
    """
    if value is None:
        return ""
    try:
        text = format_value(column.type, value)
    except (ValueError, TypeError, AttributeError) as exc:
        raise CodecError(f"cannot encode {value!r} in column {column.name!r}: {exc}") from exc
    if column.type in QUOTABLE_TYPES and (delimiter in text or '"' in text):
        return '"' + text.replace('"', '""') + '"'
    return text


def encode(
    table: Table,
    stream: IO[bytes],
    delimiter: str = ",",
    *,
    encoding: str = "utf-8",
    lineterminator: str = os.linesep,
) -> int:
    """
    Encode ``table`` onto ``stream``.

    Args:
        table (Table): Source table.
        stream (IO[bytes]): Writable binary stream (left open).
        delimiter (str): Field delimiter.
        encoding (str): Output text encoding.
        lineterminator (str): Record terminator.

    Returns:
        int: Number of data rows written.

    Raises:
        CodecError: Invalid delimiter or a value that cannot be formatted.
    """
    check_delimiter(delimiter)
    columns = table.columns
    text = io.TextIOWrapper(stream, encoding=encoding, newline="")
    try:
        text.write(delimiter.join(c.name for c in columns) + lineterminator)
        for row in table.rows:
            fields = [format_field(c, row.get(c.name), delimiter) for c in columns]
            text.write(delimiter.join(fields) + lineterminator)
        text.flush()
    finally:
        text.detach()
    return len(table.rows)
