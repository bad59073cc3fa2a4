from __future__ import annotations

import zipfile
from pathlib import Path

import pytest

from feedio.io.config import FeedSettings
from feedio.io.source import FeedSource, open_source


def test_directory_source_lists_regular_files(sample_dir: Path) -> None:
    (sample_dir / "subdir").mkdir()
    with open_source(sample_dir) as src:
        assert "agency.txt" in src and "notes.md" in src
        assert "subdir" not in src
        assert list(src) == sorted(src)
        stream = src.open("agency.txt")
        assert stream.read().startswith(b"agency_id")
    assert src.closed
    assert stream.closed


def test_directory_source_pattern(sample_dir: Path) -> None:
    with open_source(sample_dir, FeedSettings(source_pattern="*.txt")) as src:
        assert "notes.md" not in src
        assert "stops.txt" in src


def test_archive_source_keys_by_basename(sample_zip: Path, tmp_path: Path) -> None:
    with open_source(sample_zip) as src:
        assert "agency.txt" in src
        assert not any("/" in name for name in src)
        assert src.open("routes.txt").read().startswith(b"route_id")

    upper = tmp_path / "FEED.ZIP"
    upper.write_bytes(sample_zip.read_bytes())
    with open_source(upper) as src:
        assert "trips.txt" in src


def test_archive_duplicate_basenames_first_wins(tmp_path: Path) -> None:
    path = tmp_path / "dup.zip"
    with zipfile.ZipFile(path, "w") as zf:
        zf.writestr("a/agency.txt", b"first")
        zf.writestr("b/agency.txt", b"second")
        zf.writestr("empty/", b"")
    with open_source(path) as src:
        assert list(src) == ["agency.txt"]
        assert src.open("agency.txt").read() == b"first"


@pytest.mark.parametrize("path", ["", None, "bla bla 1-2/3?4", "does/not/exist", "missing.zip"])
def test_unusable_paths_yield_empty_source(path) -> None:
    with open_source(path) as src:
        assert len(src) == 0


def test_corrupt_archive_yields_empty_source(tmp_path: Path) -> None:
    bad = tmp_path / "broken.zip"
    bad.write_bytes(b"this is not a zip file")
    with open_source(bad) as src:
        assert len(src) == 0


def test_closed_source_refuses_to_open(sample_dir: Path) -> None:
    src = open_source(sample_dir)
    src.close()
    src.close()
    with pytest.raises(ValueError):
        src.open("agency.txt")


def test_empty_source() -> None:
    src = FeedSource.empty()
    assert len(src) == 0 and not src.closed
