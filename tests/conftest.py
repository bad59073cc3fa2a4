from __future__ import annotations

import zipfile
from pathlib import Path

import pytest

# Small GTFS feed: three services (WK from calendar.txt, HOL from calendar_dates.txt,
# SUN only from trips.txt), one unknown file, and a quoted stop name.
SAMPLE_FILES: dict[str, str] = {
    "agency.txt": (
        "agency_id,agency_name,agency_url,agency_timezone\n"
        "1,Test Agency,http://example.com,Europe/Brussels\n"
    ),
    "stops.txt": (
        "stop_id,stop_name,stop_lat,stop_lon\n"
        "S1,Central,50.8503,4.3517\n"
        'S2,"North, Gate",50.86,4.36\n'
    ),
    "routes.txt": "route_id,agency_id,route_short_name,route_type\nR1,1,1,3\n",
    "calendar.txt": (
        "service_id,monday,tuesday,wednesday,thursday,friday,saturday,sunday,start_date,end_date\n"
        "WK,1,1,1,1,1,0,0,20240101,20241231\n"
    ),
    "calendar_dates.txt": "service_id,date,exception_type\nWK,20240501,2\nHOL,20241225,1\n",
    "trips.txt": "route_id,service_id,trip_id\nR1,WK,T1\nR1,SUN,T2\n",
    "stop_times.txt": (
        "trip_id,arrival_time,departure_time,stop_id,stop_sequence\n"
        "T1,08:00:00,08:00:00,S1,1\n"
        "T1,25:30:10,25:31:00,S2,2\n"
    ),
    "notes.md": "not a feed table\n",
}


def write_files(root: Path, files: dict[str, str]) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    for name, content in files.items():
        (root / name).write_bytes(content.encode("utf-8"))
    return root


def write_zip(path: Path, files: dict[str, str], prefix: str = "") -> Path:
    with zipfile.ZipFile(path, "w") as zf:
        for name, content in files.items():
            zf.writestr(prefix + name, content.encode("utf-8"))
    return path


@pytest.fixture
def sample_dir(tmp_path: Path) -> Path:
    return write_files(tmp_path / "gtfs", SAMPLE_FILES)


@pytest.fixture
def sample_zip(tmp_path: Path) -> Path:
    # Entries nested under a folder; the source adapter keys them by basename.
    return write_zip(tmp_path / "gtfs.zip", SAMPLE_FILES, prefix="gtfs/")


@pytest.fixture
def feed_dir(tmp_path: Path):
    """Factory: write ``files`` into tmp_path/<name> and return the directory."""

    def _make(files: dict[str, str], name: str = "feed") -> Path:
        return write_files(tmp_path / name, files)

    return _make
