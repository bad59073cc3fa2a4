"""
Filesystem helpers for feedio.io.

Responsibilities
- Provide the small stdlib-only set of filesystem operations the feed needs:
  existence checks, directory creation, and binary write handles.

Notes
- All helpers are synchronous; the feed is single-threaded.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from typing import BinaryIO


def is_file(path: str | os.PathLike[str]) -> bool:
    return os.path.isfile(path)


def is_dir(path: str | os.PathLike[str]) -> bool:
    return os.path.isdir(path)


def makedirs(path: str | os.PathLike[str], exist_ok: bool = True) -> None:
    """
    Create directories recursively.

    Args:
        path: Directory path to create.
        exist_ok (bool): Do not error if the directory already exists.
    """
    os.makedirs(path, exist_ok=exist_ok)


@contextmanager
def open_write(path: str | os.PathLike[str]) -> Iterator[BinaryIO]:
    """
    Open a file for binary write (truncating) as a context manager.

    Yields:
        BinaryIO: Writable handle, closed on exit.
    """
    fh = open(path, "wb")
    try:
        yield fh
    finally:
        fh.close()
