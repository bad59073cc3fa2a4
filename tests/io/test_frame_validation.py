from __future__ import annotations

import polars as pl
import pytest

from feedio.core.errors import SchemaError
from feedio.core.tables import get_table
from feedio.io.validate import validate_frame_against_descriptor


def test_missing_columns_allowed_and_scalars_cast() -> None:
    desc = get_table("stop_times.txt")
    df = pl.DataFrame({"trip_id": [1, 2], "stop_sequence": [1, 2], "timepoint": [0, 1]})
    out = validate_frame_against_descriptor(df, desc)
    assert out.schema["trip_id"] == pl.Utf8
    assert out.schema["stop_sequence"] == pl.Int64
    assert out.schema["timepoint"] == pl.Utf8
    assert out.columns == ["trip_id", "stop_sequence", "timepoint"]


def test_extra_columns_strict_and_lenient() -> None:
    desc = get_table("agency.txt")
    df = pl.DataFrame({"agency_id": ["1"], "colour": ["red"]})
    with pytest.raises(SchemaError):
        validate_frame_against_descriptor(df, desc)
    assert validate_frame_against_descriptor(df, desc, strict=False).columns == ["agency_id"]


def test_failed_cast_raises_schema_error() -> None:
    desc = get_table("calendar.txt")
    df = pl.DataFrame({"service_id": ["WK"], "monday": ["maybe"]})
    with pytest.raises(SchemaError):
        validate_frame_against_descriptor(df, desc)
