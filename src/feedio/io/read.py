"""
Delimited-text decoding into an in-memory Table.

Purpose
- decode() parses an RFC4180-style byte stream (header line first) and appends
  typed rows to a Table, returning a DecodeReport.

Behavior
- Header fields that are not table columns are ignored; table columns missing
  from the header stay null.
- Empty fields are null. Other fields are parsed per column type
  (feedio.io.values). A failure aborts the decode with FieldParseError, except
  for duration columns, where the cell is nulled and recorded.
- Rows rejected by the table (duplicate primary key) are dropped and recorded;
  no error reaches the caller.
- Rows appended before a failure stay in the table.
- The stream is always closed.
"""

from __future__ import annotations

import csv
import io
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import IO, Any

from feedio.core.grammar import ColumnDescriptor

from .errors import CodecError, FieldParseError, RowConflictError
from .table import Table
from .values import LENIENT_TYPES, parse_value

logger = logging.getLogger(__name__)

__all__ = ["AnomalyKind", "DecodeAnomaly", "DecodeReport", "decode", "check_delimiter"]

RowHook = Callable[[dict[str, Any]], None]

# Largest value accepted by csv.field_size_limit on every platform (C long).
_FIELD_SIZE_LIMIT = 2**31 - 1


class AnomalyKind(str, Enum):
    ROW_CONFLICT = "row_conflict"
    DURATION_NULLED = "duration_nulled"


@dataclass(frozen=True)
class DecodeAnomaly:
    """A silently absorbed decode event (line is the 1-based physical line)."""

    kind: AnomalyKind
    line: int
    column: str | None
    detail: str


@dataclass
class DecodeReport:
    """
    Outcome of decoding one stream.

    Attributes:
        table (str): Target table name.
        rows_read (int): Data records parsed (blank lines excluded).
        rows_appended (int): Records stored in the table.
        dropped (list[DecodeAnomaly]): Records discarded as conflicts.
        nulled (list[DecodeAnomaly]): Duration cells nulled after a parse failure.
    """

    table: str
    rows_read: int = 0
    rows_appended: int = 0
    dropped: list[DecodeAnomaly] = field(default_factory=list)
    nulled: list[DecodeAnomaly] = field(default_factory=list)

    @property
    def rows_dropped(self) -> int:
        return len(self.dropped)


def check_delimiter(delimiter: str) -> None:
    """Raise CodecError unless ``delimiter`` is a single non-quote character."""
    if not isinstance(delimiter, str) or len(delimiter) != 1:
        raise CodecError(f"delimiter must be a single character, got {delimiter!r}")
    if delimiter == '"':
        raise CodecError("delimiter cannot be the quote character")


def _column_map(header: list[str], table: Table) -> list[tuple[int, ColumnDescriptor]]:
    mapped: list[tuple[int, ColumnDescriptor]] = []
    seen: set[str] = set()
    for index, raw in enumerate(header):
        name = raw.strip()
        if name in seen or not table.descriptor.has_column(name):
            continue
        seen.add(name)
        mapped.append((index, table.descriptor.column(name)))
    return mapped


def decode(
    stream: IO[bytes],
    table: Table,
    delimiter: str = ",",
    *,
    encoding: str = "utf-8-sig",
    row_hook: RowHook | None = None,
) -> DecodeReport:
    """
    Decode ``stream`` into ``table``.

    Args:
        stream (IO[bytes]): Readable binary stream; consumed and closed.
        table (Table): Target table, mutated in place.
        delimiter (str): Field delimiter.
        encoding (str): Text encoding; the default accepts an optional UTF-8 BOM.
        row_hook (Callable | None): Called with each row dict before insertion.

    Returns:
        DecodeReport: Counts and absorbed anomalies.

    Raises:
        FieldParseError: A non-duration field failed to parse (``.report`` holds
            the partial report).
        CodecError: Invalid delimiter, undecodable bytes, or malformed records.
    """
    report = DecodeReport(table.name)
    try:
        check_delimiter(delimiter)
        text = io.TextIOWrapper(stream, encoding=encoding, newline="")
        try:
            _decode_records(text, table, delimiter, report, row_hook)
        finally:
            text.close()
    except FieldParseError as exc:
        exc.report = report
        raise
    except (csv.Error, UnicodeDecodeError) as exc:
        raise CodecError(f"{table.name}: unreadable delimited text: {exc}") from exc
    finally:
        stream.close()

    if report.dropped or report.nulled:
        logger.debug(
            f"{table.name}: dropped {report.rows_dropped} rows, "
            f"nulled {len(report.nulled)} duration cells"
        )
    return report


def _decode_records(
    text: IO[str],
    table: Table,
    delimiter: str,
    report: DecodeReport,
    row_hook: RowHook | None,
) -> None:
    # csv caps fields at 131072 characters by default; the limit is process-wide
    previous_limit = csv.field_size_limit(_FIELD_SIZE_LIMIT)
    try:
        _read_rows(text, table, delimiter, report, row_hook)
    finally:
        csv.field_size_limit(previous_limit)


def _read_rows(
    text: IO[str],
    table: Table,
    delimiter: str,
    report: DecodeReport,
    row_hook: RowHook | None,
) -> None:
    reader = csv.reader(text, delimiter=delimiter, quotechar='"', doublequote=True)
    columns: list[tuple[int, ColumnDescriptor]] | None = None

    for fields in reader:
        if not fields:
            continue
        if columns is None:
            columns = _column_map(fields, table)
            continue

        line = reader.line_num
        report.rows_read += 1
        row: dict[str, Any] = {}
        for index, column in columns:
            if index >= len(fields) or fields[index] == "":
                continue
            raw = fields[index]
            try:
                row[column.name] = parse_value(column.type, raw)
            except ValueError as exc:
                if column.type not in LENIENT_TYPES:
                    raise FieldParseError(
                        table.name, line, column.name, raw, column.type, exc
                    ) from exc
                report.nulled.append(
                    DecodeAnomaly(AnomalyKind.DURATION_NULLED, line, column.name, raw)
                )

        if row_hook is not None:
            row_hook(row)
        try:
            table.append(row)
        except RowConflictError as exc:
            report.dropped.append(DecodeAnomaly(AnomalyKind.ROW_CONFLICT, line, None, str(exc)))
            continue
        report.rows_appended += 1
