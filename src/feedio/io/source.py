"""
Source adapter: a directory or a zip archive seen as named byte streams.

Purpose
- open_source(path, settings) never raises for unusable input. Empty, malformed,
  or non-existent paths and unreadable archives yield an empty FeedSource.
- Streams are opened lazily by name and every opened handle (and the archive
  itself) is released by FeedSource.close(), which the context manager calls on
  every exit path.

Notes
- Archive entries are keyed by basename; directory entries inside the archive are
  skipped. When two entries share a basename the first one wins.
- Directory sources list regular files matching settings.source_pattern (glob),
  non-recursively, in sorted order.
"""

from __future__ import annotations

import fnmatch
import logging
import os
import zipfile
from collections.abc import Callable, Iterator, Mapping
from pathlib import Path
from typing import IO

from . import fs
from .config import FeedSettings

logger = logging.getLogger(__name__)

__all__ = ["FeedSource", "open_source"]

Opener = Callable[[], IO[bytes]]


class FeedSource(Mapping[str, Opener]):
    """
    Mapping of entry name -> opener, with deterministic teardown.

    Use open(name) to obtain a binary stream; the source tracks it and closes it
    on close() if the consumer did not.

    Examples:
        >>> with FeedSource.empty() as src:
        ...     len(src)
        0
    """

    def __init__(
        self,
        openers: Mapping[str, Opener] | None = None,
        *,
        location: str = "",
        on_close: Callable[[], None] | None = None,
    ) -> None:
        self._openers: dict[str, Opener] = dict(openers or {})
        self._handles: list[IO[bytes]] = []
        self._on_close = on_close
        self._closed = False
        self.location = location

    @classmethod
    def empty(cls, location: str = "") -> FeedSource:
        return cls(location=location)

    def __getitem__(self, name: str) -> Opener:
        return self._openers[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._openers)

    def __len__(self) -> int:
        return len(self._openers)

    def __repr__(self) -> str:
        return f"FeedSource({self.location!r}, entries={len(self._openers)})"

    def __enter__(self) -> FeedSource:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def open(self, name: str) -> IO[bytes]:
        """
        Open the named entry for binary read.

        Raises:
            KeyError: Unknown entry.
            ValueError: The source is already closed.
        """
        if self._closed:
            raise ValueError(f"source {self.location!r} is closed")
        stream = self._openers[name]()
        self._handles.append(stream)
        return stream

    def close(self) -> None:
        """Close every handle opened through this source, then the source itself."""
        if self._closed:
            return
        self._closed = True
        handles, self._handles = self._handles, []
        try:
            for stream in handles:
                stream.close()
        finally:
            if self._on_close is not None:
                self._on_close()


def _archive_source(path: str) -> FeedSource:
    archive = zipfile.ZipFile(path, "r")
    openers: dict[str, Opener] = {}
    for info in archive.infolist():
        if info.is_dir():
            continue
        name = os.path.basename(info.filename)
        if not name or name in openers:
            continue
        openers[name] = lambda info=info: archive.open(info, "r")
    logger.debug(f"Archive {path} lists {len(openers)} entries")
    return FeedSource(openers, location=path, on_close=archive.close)


def _directory_source(path: str, pattern: str) -> FeedSource:
    openers: dict[str, Opener] = {}
    for entry in sorted(Path(path).iterdir()):
        if entry.is_file() and fnmatch.fnmatch(entry.name, pattern):
            openers[entry.name] = lambda entry=entry: entry.open("rb")
    logger.debug(f"Directory {path} lists {len(openers)} files matching {pattern!r}")
    return FeedSource(openers, location=path)


def open_source(
    path: str | os.PathLike[str] | None, settings: FeedSettings | None = None
) -> FeedSource:
    """
    Resolve ``path`` to a FeedSource.

    Args:
        path: Archive file, directory, or anything else (yields an empty source).
        settings (FeedSettings | None): Archive suffix and directory glob pattern.

    Returns:
        FeedSource: Possibly empty; the caller must close it.
    """
    settings = settings or FeedSettings()
    if not path:
        return FeedSource.empty()
    try:
        location = os.fspath(path)
        if settings.is_archive(location) and fs.is_file(location):
            return _archive_source(location)
        if fs.is_dir(location):
            return _directory_source(location, settings.source_pattern)
    except (OSError, ValueError, TypeError, zipfile.BadZipFile) as exc:
        logger.warning(f"Source {path!r} is unreadable, importing nothing: {exc}")
        return FeedSource.empty(str(path))
    logger.info(f"Source {path!r} is neither an archive nor a directory, importing nothing")
    return FeedSource.empty(location)
