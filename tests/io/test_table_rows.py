from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

import polars as pl
import pytest

from feedio.core.errors import SchemaError
from feedio.core.grammar import ColumnDescriptor, SemanticType, TableDescriptor
from feedio.core.tables import get_table
from feedio.io.errors import RowConflictError
from feedio.io.table import Table


def test_new_row_has_every_column_null() -> None:
    table = Table(get_table("agency.txt"))
    row = table.new_row()
    assert set(row) == set(table.column_names)
    assert all(v is None for v in row.values())
    assert len(table) == 0


def test_append_coerces_and_rejects() -> None:
    table = Table(get_table("stops.txt"))
    stored = table.append({"stop_id": 7, "stop_lat": 50.85})
    assert stored["stop_id"] == "7"
    assert stored["stop_lat"] == Decimal("50.85")
    assert stored["stop_name"] is None

    with pytest.raises(SchemaError):
        table.append({"stop_id": "8", "bogus": 1})
    with pytest.raises(SchemaError):
        table.append({"stop_id": "8", "stop_lat": "north"})
    assert len(table) == 1


def test_primary_key_conflicts_and_find() -> None:
    table = Table(get_table("calendar_dates.txt"))
    table.append({"service_id": "WK", "date": date(2024, 5, 1)})
    table.append({"service_id": "WK", "date": date(2024, 5, 2)})
    with pytest.raises(RowConflictError) as info:
        table.append({"service_id": "WK", "date": date(2024, 5, 1), "exception_type": "2"})
    assert info.value.key == ("WK", date(2024, 5, 1))
    assert len(table) == 2

    assert table.find("WK", date(2024, 5, 2)) is table[1]
    assert table.find("XX", date(2024, 5, 2)) is None


def test_find_without_primary_key_raises() -> None:
    table = Table(get_table("transfers.txt"))
    with pytest.raises(SchemaError):
        table.find("S1")


def test_add_row_positional() -> None:
    table = Table(TableDescriptor("test1.csv", (ColumnDescriptor("field1"),)))
    assert table.add_row("value1") == {"field1": "value1"}
    with pytest.raises(SchemaError):
        table.add_row("a", "b")


def test_add_column_backfills_nulls_and_clear() -> None:
    table = Table(TableDescriptor("t.csv", (ColumnDescriptor("a"),)))
    table.add_row("x")
    table.add_column(ColumnDescriptor("b", SemanticType.INTEGER))
    assert table.column_names == ("a", "b")
    assert table[0] == {"a": "x", "b": None}
    table.append({"a": "y", "b": 2})

    table.clear()
    assert len(table) == 0 and list(table) == []


def test_extend_schema_rejects_retyped_columns() -> None:
    table = Table(TableDescriptor("t.csv", (ColumnDescriptor("a"),)))
    with pytest.raises(SchemaError):
        table.extend_schema(TableDescriptor("t.csv", (ColumnDescriptor("a", "integer"),)))
    with pytest.raises(SchemaError):
        table.extend_schema(TableDescriptor("other.csv", (ColumnDescriptor("a"),)))


def test_to_frame_dtypes() -> None:
    table = Table(get_table("stop_times.txt"))
    table.append(
        {
            "trip_id": "T1",
            "arrival_time": timedelta(hours=25, minutes=30, seconds=10),
            "stop_sequence": 1,
            "shape_dist_traveled": Decimal("1.25"),
        }
    )
    df = table.to_frame()
    assert df.columns == list(table.column_names)
    assert df.height == 1
    assert df.schema["trip_id"] == pl.Utf8
    assert df.schema["stop_sequence"] == pl.Int64
    assert df.schema["arrival_time"] == pl.Duration("us")
    assert df["arrival_time"][0] == timedelta(hours=25, minutes=30, seconds=10)

    calendar = Table(get_table("calendar.txt")).to_frame()
    assert calendar.height == 0
    assert calendar.schema["monday"] == pl.Boolean
    assert calendar.schema["start_date"] == pl.Date


def test_extend_frame_casts_and_validates() -> None:
    table = Table(get_table("agency.txt"))
    df = pl.DataFrame({"agency_id": [1, 2], "agency_name": ["A", "B"]})
    assert table.extend_frame(df) == 2
    assert [r["agency_id"] for r in table] == ["1", "2"]

    with pytest.raises(SchemaError):
        table.extend_frame(pl.DataFrame({"agency_id": ["3"], "colour": ["red"]}))
    assert table.extend_frame(pl.DataFrame({"agency_id": ["3"], "colour": ["red"]}), strict=False) == 1
    assert table.find("3") is not None

    with pytest.raises(RowConflictError):
        table.extend_frame(pl.DataFrame({"agency_id": ["1"]}))
