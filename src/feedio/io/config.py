"""
Configuration for the feedio.io module.

Defines FeedSettings, a frozen dataclass carrying runtime configuration for the
codec, the source adapter, and feed saving. Defaults are sourced from
feedio.core.constants (the single source of truth).

Source of truth
- feedio.core.constants.DEFAULT_DELIMITER, DEFAULT_ENCODING, ARCHIVE_SUFFIX,
  SOURCE_PATTERN, SCHEMA_DOCUMENT_NAME

Notes
- Precedence when loading: environment (FEEDIO_*) > TOML > defaults.
- TOML search order: ./feedio.toml (top-level keys or a [feedio] table), then
  ./pyproject.toml under [tool.feedio].
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from feedio.core.constants import ARCHIVE_SUFFIX as CORE_ARCHIVE_SUFFIX
from feedio.core.constants import DEFAULT_DELIMITER as CORE_DELIMITER
from feedio.core.constants import DEFAULT_ENCODING as CORE_ENCODING
from feedio.core.constants import SCHEMA_DOCUMENT_NAME as CORE_SCHEMA_DOCUMENT_NAME
from feedio.core.constants import SOURCE_PATTERN as CORE_SOURCE_PATTERN

from .errors import CodecError

_LINE_TERMINATORS = {"lf": "\n", "crlf": "\r\n", "cr": "\r", "native": os.linesep}


@dataclass(frozen=True)
class FeedSettings:
    """
    Runtime settings for the feedio.io layer.

    Attributes:
        delimiter (str): Field delimiter, exactly one character (default ",").
        encoding (str): Text encoding for writes; reads also accept a UTF-8 BOM.
        lineterminator (str): Record terminator for writes (default os.linesep).
        archive_suffix (str): Suffix marking zip sources/destinations (case-insensitive).
        source_pattern (str): Glob selecting files in directory sources.
        schema_document_name (str): Name of the persisted schema document.
        compress_archive (bool): Deflate archive entries (stored otherwise).

    Examples:
        >>> from feedio.io.config import FeedSettings
        >>> FeedSettings(delimiter=";").delimiter
        ';'
    """

    delimiter: str = CORE_DELIMITER
    encoding: str = CORE_ENCODING
    lineterminator: str = os.linesep
    archive_suffix: str = CORE_ARCHIVE_SUFFIX
    source_pattern: str = CORE_SOURCE_PATTERN
    schema_document_name: str = CORE_SCHEMA_DOCUMENT_NAME
    compress_archive: bool = True

    def __post_init__(self) -> None:
        if len(self.delimiter) != 1:
            raise CodecError(f"delimiter must be a single character, got {self.delimiter!r}")
        if self.delimiter == '"':
            raise CodecError("delimiter cannot be the quote character")

    def is_archive(self, path: str | os.PathLike[str]) -> bool:
        """True if ``path`` names an archive by suffix."""
        return os.fspath(path).lower().endswith(self.archive_suffix.lower())

    # Configuration loaders (env/TOML) with precedence: env > TOML > defaults.

    @classmethod
    def _apply_mapping(cls, base: FeedSettings, cfg: dict[str, Any] | None) -> FeedSettings:
        """Apply a loose config mapping onto FeedSettings, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        s = base

        def _bool(v: Any) -> bool:
            if isinstance(v, bool):
                return v
            if isinstance(v, (int, float)):
                return bool(v)
            if isinstance(v, str):
                return v.strip().lower() in {"1", "true", "t", "yes", "y", "on"}
            return False

        if isinstance(cfg.get("delimiter"), str) and len(cfg["delimiter"]) == 1:
            s = replace(s, delimiter=cfg["delimiter"])

        if isinstance(cfg.get("encoding"), str) and cfg["encoding"].strip():
            s = replace(s, encoding=cfg["encoding"].strip())

        # lineterminator accepts names ("lf", "crlf") or the literal sequence
        term = cfg.get("lineterminator")
        if isinstance(term, str):
            named = _LINE_TERMINATORS.get(term.strip().lower())
            if named is not None:
                s = replace(s, lineterminator=named)
            elif term in ("\n", "\r\n", "\r"):
                s = replace(s, lineterminator=term)

        if isinstance(cfg.get("archive_suffix"), str) and cfg["archive_suffix"]:
            s = replace(s, archive_suffix=cfg["archive_suffix"])

        if isinstance(cfg.get("source_pattern"), str) and cfg["source_pattern"]:
            s = replace(s, source_pattern=cfg["source_pattern"])

        if isinstance(cfg.get("schema_document_name"), str) and cfg["schema_document_name"]:
            s = replace(s, schema_document_name=cfg["schema_document_name"])

        if "compress_archive" in cfg:
            s = replace(s, compress_archive=_bool(cfg["compress_archive"]))

        return s

    @classmethod
    def from_env(cls, base: FeedSettings | None = None, prefix: str = "FEEDIO_") -> FeedSettings:
        """
        Build FeedSettings from environment variables. Precedence is env > base > defaults.

        Recognized variables:
            - FEEDIO_DELIMITER
            - FEEDIO_ENCODING
            - FEEDIO_LINETERMINATOR ("lf" | "crlf" | "cr" | "native")
            - FEEDIO_ARCHIVE_SUFFIX
            - FEEDIO_SOURCE_PATTERN
            - FEEDIO_SCHEMA_DOCUMENT_NAME
            - FEEDIO_COMPRESS_ARCHIVE (1/0/true/false/yes/no/on/off)
        """
        s = base or cls()
        mapping: dict[str, Any] = {}
        for key in (
            "delimiter",
            "encoding",
            "lineterminator",
            "archive_suffix",
            "source_pattern",
            "schema_document_name",
            "compress_archive",
        ):
            v = os.getenv(prefix + key.upper())
            if v:
                mapping[key] = v
        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> FeedSettings:
        """
        Build FeedSettings from a TOML file.

        Search order when `path` is None:
            1) ./feedio.toml (with either a top-level [feedio] table or direct keys)
            2) ./pyproject.toml under [tool.feedio]

        Returns defaults if no file is present or none carries feedio settings.
        """
        s = cls()

        def _load_toml(p: Path) -> dict[str, Any] | None:
            try:
                with p.open("rb") as fh:
                    return tomllib.load(fh)  # type: ignore[arg-type]
            except (OSError, tomllib.TOMLDecodeError):
                return None

        cfg: dict[str, Any] | None = None

        cand: list[Path] = []
        if path is not None:
            cand.append(Path(path))
        else:
            cand.append(Path.cwd() / "feedio.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        for p in cand:
            if not p.exists():
                continue
            data = _load_toml(p)
            if not isinstance(data, dict):
                continue
            if p.name == "pyproject.toml":
                tool = data.get("tool", {})
                cfg = tool.get("feedio") if isinstance(tool, dict) else None
            elif isinstance(data.get("feedio"), dict):
                cfg = data["feedio"]
            else:
                cfg = data
            if cfg:
                break

        return cls._apply_mapping(s, cfg)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> FeedSettings:
        """
        Load FeedSettings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search defaults (feedio.toml, pyproject.toml).
        """
        s = cls.from_toml(path)
        s = cls.from_env(base=s)
        return s
