from __future__ import annotations

import json
import zipfile
from datetime import date, timedelta
from decimal import Decimal
from pathlib import Path

import pytest

from feedio.core.errors import SchemaError, VersionMismatch
from feedio.core.grammar import ColumnDescriptor, TableDescriptor
from feedio.core.registry import default_registry
from feedio.core.schema import SchemaDocument
from feedio.io.config import FeedSettings
from feedio.io.errors import FeedWriteError, FieldParseError, SchemaDocumentError
from feedio.io.feed import Feed, FeedState


def _rows(feed: Feed, name: str) -> list[dict]:
    return [dict(r) for r in feed[name]]


def test_empty_feed_is_schema_initialized() -> None:
    feed = Feed()
    assert feed.state is FeedState.EMPTY
    assert set(feed.tables) == set(default_registry())
    assert all(len(t) == 0 for t in feed.tables.values())
    assert feed.exportable_tables() == []


@pytest.mark.parametrize("path", ["", "bla bla 1-2/3?4", "/definitely/not/here", "missing.zip"])
def test_garbage_paths_never_raise(path: str) -> None:
    feed = Feed(path)
    assert feed.state is FeedState.LOADED
    assert "agency.txt" in feed
    assert len(feed["agency.txt"]) == 0


def test_agency_scenario(feed_dir) -> None:
    path = feed_dir({"agency.txt": "agency_id,agency_name\n1,Test Agency\n"})
    feed = Feed(path)
    rows = _rows(feed, "agency.txt")
    assert len(rows) == 1
    assert rows[0]["agency_id"] == "1"
    assert rows[0]["agency_name"] == "Test Agency"


def test_sample_directory_import(sample_dir: Path) -> None:
    feed = Feed(sample_dir)

    assert len(feed["stops.txt"]) == 2
    assert feed["stops.txt"].find("S2")["stop_name"] == "North, Gate"
    assert feed["stops.txt"].find("S1")["stop_lat"] == Decimal("50.8503")
    assert feed["calendar.txt"][0]["saturday"] is False
    assert feed["calendar.txt"][0]["end_date"] == date(2024, 12, 31)
    assert feed["stop_times.txt"][1]["arrival_time"] == timedelta(hours=25, minutes=30, seconds=10)

    # unknown files create no table
    assert "notes.md" not in feed
    assert set(feed.import_reports) == {
        "agency.txt",
        "stops.txt",
        "routes.txt",
        "calendar.txt",
        "calendar_dates.txt",
        "trips.txt",
        "stop_times.txt",
    }


def test_services_seed_collects_referenced_services(sample_dir: Path) -> None:
    feed = Feed(sample_dir)
    services = [r["service_id"] for r in feed["services"]]
    assert services == ["WK", "HOL", "SUN"]
    assert feed["services"] not in feed.exportable_tables()


def test_import_from_archive_matches_directory(sample_dir: Path, sample_zip: Path) -> None:
    from_dir = Feed(sample_dir)
    from_zip = Feed(sample_zip)
    for name in from_dir.tables:
        assert _rows(from_zip, name) == _rows(from_dir, name), name


def test_round_trip_directory_and_archive(sample_dir: Path, tmp_path: Path) -> None:
    original = Feed(sample_dir)

    out_dir = tmp_path / "out" / "nested"
    written = original.save(out_dir)
    assert "agency.txt" in written and "services" not in written
    assert not (out_dir / "feed.schema.json").exists()

    out_zip = tmp_path / "out.zip"
    original.save(out_zip)
    with zipfile.ZipFile(out_zip) as zf:
        assert sorted(zf.namelist()) == sorted(written)

    for target in (out_dir, out_zip):
        copy = Feed(target)
        for table in original.exportable_tables():
            assert copy[table.name].column_names == table.column_names
            assert _rows(copy, table.name) == _rows(original, table.name), (target, table.name)


def test_save_is_repeatable(sample_dir: Path, tmp_path: Path) -> None:
    feed = Feed(sample_dir)
    first = feed.save(tmp_path / "a.zip")
    second = feed.save(tmp_path / "a.zip")
    assert first == second
    assert feed.state is FeedState.LOADED


def test_custom_table_round_trip_writes_schema_document(tmp_path: Path) -> None:
    feed = Feed()
    table = feed.add_table("test1.csv", ["field1"])
    table.add_row("value1")
    assert feed.has_custom_tables()

    written = feed.save(tmp_path / "custom.zip")
    assert written == ["test1.csv", "feed.schema.json"]

    copy = Feed(tmp_path / "custom.zip")
    assert "test1.csv" in copy
    assert not copy["test1.csv"].descriptor.is_built_in
    assert _rows(copy, "test1.csv") == [{"field1": "value1"}]


def test_schema_document_excludes_flagged_tables(tmp_path: Path) -> None:
    feed = Feed()
    feed.add_table(
        TableDescriptor(
            "hidden.csv",
            (ColumnDescriptor("a"),),
            exclude_from_schema_export=True,
        )
    )
    kept = feed.add_table(
        TableDescriptor("kept.csv", (ColumnDescriptor("a"),), exclude_from_data_export=True)
    )
    kept.add_row("x")

    names = [t.name for t in feed.schema_document().tables]
    assert "hidden.csv" not in names and "services" not in names
    assert "kept.csv" in names

    written = feed.save(tmp_path / "dir")
    assert "kept.csv" not in written
    doc = json.loads((tmp_path / "dir" / "feed.schema.json").read_text())
    assert "hidden.csv" not in [t["name"] for t in doc["tables"]]


def test_add_table_rejects_duplicates() -> None:
    feed = Feed()
    with pytest.raises(SchemaError):
        feed.add_table("agency.txt", ["agency_id"])
    with pytest.raises(SchemaError):
        feed.add_table(TableDescriptor("x.csv", (ColumnDescriptor("a"),)), ["b"])


def test_schema_document_in_source_extends_builtin_tables(feed_dir) -> None:
    doc = {
        "version": "1.0",
        "tables": [
            {"name": "agency.txt", "columns": [{"name": "agency_region"}]},
            {
                "name": "stop_notes.txt",
                "columns": [{"name": "stop_id"}, {"name": "note"}],
                "relations": [{"parent": "stops.txt", "child_columns": ["stop_id"]}],
            },
        ],
    }
    path = feed_dir(
        {
            "feed.schema.json": json.dumps(doc),
            "agency.txt": "agency_id,agency_region\n1,North\n",
            "stop_notes.txt": "stop_id,note\nS1,hello\n",
            "stops.txt": "stop_id\nS1\n",
        }
    )
    feed = Feed(path)
    assert feed["agency.txt"][0]["agency_region"] == "North"
    assert _rows(feed, "stop_notes.txt") == [{"stop_id": "S1", "note": "hello"}]
    assert "feed.schema.json" not in feed
    assert feed.registry["stop_notes.txt"].parents == ("stops.txt",)


def test_merge_schema_after_rows_backfills_nulls() -> None:
    feed = Feed()
    feed["agency.txt"].append({"agency_id": "1"})
    feed.merge_schema(
        SchemaDocument.model_validate(
            {"tables": [{"name": "agency.txt", "columns": [{"name": "agency_region"}]}]}
        )
    )
    assert feed["agency.txt"][0]["agency_region"] is None
    assert feed.registry["agency.txt"].has_column("agency_region")


def test_malformed_schema_document_raises(feed_dir) -> None:
    path = feed_dir({"feed.schema.json": "{not json"}, name="bad_json")
    with pytest.raises(SchemaDocumentError):
        Feed(path)

    path = feed_dir({"feed.schema.json": json.dumps({"tables": [{"columns": []}]})}, name="bad_shape")
    with pytest.raises(SchemaDocumentError):
        Feed(path)

    path = feed_dir({"feed.schema.json": json.dumps({"version": "9.0", "tables": []})}, name="v9")
    with pytest.raises(VersionMismatch):
        Feed(path)


def test_parse_failure_propagates_from_construction(feed_dir) -> None:
    path = feed_dir({"calendar.txt": "service_id,monday\nWK,yes\n"})
    with pytest.raises(FieldParseError):
        Feed(path)


def test_dropped_rows_are_reported(feed_dir) -> None:
    path = feed_dir({"agency.txt": "agency_id,agency_name\n1,A\n1,B\n"})
    feed = Feed(path)
    assert len(feed["agency.txt"]) == 1
    assert feed.import_reports["agency.txt"].rows_dropped == 1


def test_semicolon_settings_round_trip(sample_dir: Path, tmp_path: Path) -> None:
    feed = Feed(sample_dir)
    feed.settings = FeedSettings(delimiter=";", lineterminator="\r\n")
    feed.save(tmp_path / "semi")

    raw = (tmp_path / "semi" / "stops.txt").read_bytes()
    assert raw.startswith(b"stop_id;stop_code;stop_name;")
    assert b"S2;;North, Gate;" in raw
    assert raw.endswith(b"\r\n")

    copy = Feed(tmp_path / "semi", settings=feed.settings)
    assert copy["stops.txt"].find("S2")["stop_name"] == "North, Gate"
    assert _rows(copy, "trips.txt") == _rows(feed, "trips.txt")


def test_unwritable_destination_raises_feed_write_error(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("file, not a directory")
    feed = Feed()
    feed["agency.txt"].append({"agency_id": "1"})
    with pytest.raises(FeedWriteError):
        feed.save(blocker / "out")


def test_table_lookup_by_name() -> None:
    feed = Feed()
    assert feed.table("agency.txt") is feed["agency.txt"]
    assert feed.table("nope.txt") is None


def test_services_relation_without_matching_columns_imports(feed_dir) -> None:
    doc = {
        "version": "1.0",
        "tables": [
            {
                "name": "c.txt",
                "columns": [{"name": "svc"}],
                "relations": [{"parent": "services", "child_columns": ["svc"]}],
            },
            {
                "name": "d.txt",
                "columns": [{"name": "svc"}],
                "relations": [
                    {
                        "parent": "services",
                        "child_columns": ["svc"],
                        "parent_columns": ["service_id"],
                    }
                ],
            },
        ],
    }
    path = feed_dir(
        {
            "feed.schema.json": json.dumps(doc),
            "c.txt": "svc\nA\n",
            "d.txt": "svc\nB\n",
        }
    )
    feed = Feed(path)
    assert _rows(feed, "c.txt") == [{"svc": "A"}]
    assert _rows(feed, "d.txt") == [{"svc": "B"}]
    assert [r["service_id"] for r in feed["services"]] == ["B"]
