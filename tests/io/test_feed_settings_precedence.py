from __future__ import annotations

import os
from pathlib import Path

import pytest

from feedio.io.config import FeedSettings
from feedio.io.errors import CodecError

ENV_KEYS = [
    "FEEDIO_DELIMITER",
    "FEEDIO_ENCODING",
    "FEEDIO_LINETERMINATOR",
    "FEEDIO_ARCHIVE_SUFFIX",
    "FEEDIO_SOURCE_PATTERN",
    "FEEDIO_SCHEMA_DOCUMENT_NAME",
    "FEEDIO_COMPRESS_ARCHIVE",
]


@pytest.fixture
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


def test_settings_precedence_env_over_toml(tmp_path: Path, clean_env) -> None:
    (tmp_path / "feedio.toml").write_text(
        """
        [feedio]
        delimiter = ";"
        source_pattern = "*.txt"
        compress_archive = false
        """.strip()
    )
    clean_env.chdir(tmp_path)
    clean_env.setenv("FEEDIO_DELIMITER", "|")
    clean_env.setenv("FEEDIO_LINETERMINATOR", "crlf")

    s = FeedSettings.load()

    assert s.delimiter == "|"  # env override
    assert s.lineterminator == "\r\n"
    assert s.source_pattern == "*.txt"  # from TOML
    assert s.compress_archive is False


def test_settings_from_pyproject_tool_table(tmp_path: Path, clean_env) -> None:
    (tmp_path / "pyproject.toml").write_text(
        """
        [tool.feedio]
        archive_suffix = ".gtfs"
        schema_document_name = "tables.json"
        lineterminator = "lf"
        """.strip()
    )
    clean_env.chdir(tmp_path)

    s = FeedSettings.load()

    assert s.archive_suffix == ".gtfs"
    assert s.schema_document_name == "tables.json"
    assert s.lineterminator == "\n"
    assert s.is_archive("feed.GTFS")


def test_settings_defaults_when_no_config(tmp_path: Path, clean_env) -> None:
    clean_env.chdir(tmp_path)
    s = FeedSettings.load()
    assert s == FeedSettings()
    assert s.delimiter == ","
    assert s.encoding == "utf-8"
    assert s.lineterminator == os.linesep
    assert s.schema_document_name == "feed.schema.json"
    assert s.is_archive("x.ZIP") and not s.is_archive("x.txt")


def test_explicit_toml_path_and_invalid_values_ignored(tmp_path: Path, clean_env) -> None:
    cfg = tmp_path / "custom.toml"
    cfg.write_text('delimiter = ";;"\nencoding = "latin-1"\nlineterminator = "weird"\n')
    s = FeedSettings.load(cfg)
    assert s.delimiter == ","
    assert s.encoding == "latin-1"
    assert s.lineterminator == os.linesep


def test_invalid_delimiter_rejected() -> None:
    with pytest.raises(CodecError):
        FeedSettings(delimiter="")
    with pytest.raises(CodecError):
        FeedSettings(delimiter='"')
