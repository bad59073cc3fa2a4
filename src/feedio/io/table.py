"""
In-memory feed table.

A Table pairs a TableDescriptor with an insertion-ordered list of rows. Each row
is a dict holding every column name; values are None or conform to the
column's semantic type (see feedio.io.values.coerce_value).

Notes
- The primary key is enforced on append: a second row with the same non-null key
  raises RowConflictError. Keys with a null component are never compared.
- Parent relations are not enforced; they only order imports.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

import polars as pl

from feedio.core.errors import SchemaError
from feedio.core.grammar import ColumnDescriptor, TableDescriptor

from .errors import RowConflictError
from .validate import validate_frame_against_descriptor
from .values import POLARS_DTYPES, coerce_value

Row = dict[str, Any]


class Table:
    """
    Named, typed, ordered column set plus an ordered row sequence.

    Examples:
        >>> from feedio.core.grammar import ColumnDescriptor, TableDescriptor
        >>> t = Table(TableDescriptor("test1.csv", (ColumnDescriptor("field1"),)))
        >>> t.add_row("value1")["field1"]
        'value1'
        >>> len(t)
        1
    """

    def __init__(self, descriptor: TableDescriptor) -> None:
        self.descriptor = descriptor
        self.rows: list[Row] = []
        self._keys: dict[tuple[Any, ...], Row] = {}

    def __repr__(self) -> str:
        return f"Table({self.name!r}, columns={len(self.columns)}, rows={len(self.rows)})"

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def __getitem__(self, index: int) -> Row:
        return self.rows[index]

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def columns(self) -> tuple[ColumnDescriptor, ...]:
        return self.descriptor.columns

    @property
    def column_names(self) -> tuple[str, ...]:
        return self.descriptor.column_names

    # ---------------------------------------------------------------------
    # Rows
    # ---------------------------------------------------------------------
    def new_row(self) -> Row:
        """Return a detached row with every column set to None."""
        return dict.fromkeys(self.column_names)

    def append(self, row: Mapping[str, Any]) -> Row:
        """
        Coerce and append a row.

        Args:
            row (Mapping[str, Any]): Column name -> value; omitted columns are null.

        Returns:
            Row: The stored row.

        Raises:
            SchemaError: Unknown column or a value that does not conform to its type.
            RowConflictError: Duplicate non-null primary key.
        """
        unknown = [k for k in row if not self.descriptor.has_column(k)]
        if unknown:
            raise SchemaError(f"table {self.name!r} has no columns {unknown!r}")
        record = {
            c.name: coerce_value(c.type, row.get(c.name), column=c.name) for c in self.columns
        }
        key = self._key_of(record)
        if key is not None:
            if key in self._keys:
                raise RowConflictError(self.name, key)
            self._keys[key] = record
        self.rows.append(record)
        return record

    def add_row(self, *values: Any) -> Row:
        """Append a row given positionally in column order."""
        if len(values) > len(self.columns):
            raise SchemaError(
                f"table {self.name!r} has {len(self.columns)} columns; got {len(values)} values"
            )
        return self.append(dict(zip(self.column_names, values)))

    def find(self, *key: Any) -> Row | None:
        """
        Look up a row by primary key.

        Raises:
            SchemaError: If the table declares no primary key.
        """
        if not self.descriptor.primary_key:
            raise SchemaError(f"table {self.name!r} declares no primary key")
        return self._keys.get(tuple(key))

    def clear(self) -> None:
        self.rows.clear()
        self._keys.clear()

    def _key_of(self, record: Row) -> tuple[Any, ...] | None:
        pk = self.descriptor.primary_key
        if not pk:
            return None
        key = tuple(record[c] for c in pk)
        if any(v is None for v in key):
            return None
        return key

    # ---------------------------------------------------------------------
    # Schema
    # ---------------------------------------------------------------------
    def add_column(self, column: ColumnDescriptor) -> None:
        """Append a column; existing rows get a null cell."""
        self.extend_schema(self.descriptor.with_columns(column))

    def extend_schema(self, descriptor: TableDescriptor) -> None:
        """
        Adopt a descriptor that extends the current one (same name, superset of columns).

        Raises:
            SchemaError: If the descriptor drops or retypes an existing column.
        """
        if descriptor.name != self.name:
            raise SchemaError(f"cannot adopt descriptor {descriptor.name!r} for {self.name!r}")
        for column in self.columns:
            if not descriptor.has_column(column.name) or descriptor.column(column.name) != column:
                raise SchemaError(f"descriptor for {self.name!r} changes column {column.name!r}")
        added = [c.name for c in descriptor.columns if not self.descriptor.has_column(c.name)]
        self.descriptor = descriptor
        for row in self.rows:
            for name in added:
                row[name] = None

    # ---------------------------------------------------------------------
    # Frames
    # ---------------------------------------------------------------------
    def to_frame(self) -> pl.DataFrame:
        """Materialize the rows as a polars DataFrame typed from the descriptor."""
        return pl.DataFrame(
            [
                pl.Series(
                    c.name,
                    [row[c.name] for row in self.rows],
                    dtype=POLARS_DTYPES[c.type],  # type: ignore[arg-type]
                    strict=False,
                )
                for c in self.columns
            ]
        )

    def extend_frame(self, df: pl.DataFrame, *, strict: bool = True) -> int:
        """
        Validate a frame against the descriptor and append its rows.

        Returns:
            int: Number of rows appended.

        Raises:
            SchemaError: Frame validation or value coercion failed.
            RowConflictError: A row duplicates an existing primary key.
        """
        df = validate_frame_against_descriptor(df, self.descriptor, strict=strict)
        count = 0
        for record in df.iter_rows(named=True):
            self.append(record)
            count += 1
        return count
