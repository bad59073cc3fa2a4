"""
Feed-wide defaults shared by the core and IO layers.

Defines the well-known schema document name, the default delimiter, the archive
suffix, and the seed tables front-loaded during import ordering. This module is
zero-IO and uses only the Python standard library.

Notes:
    - Single source of truth: feedio.io.config.FeedSettings reads its defaults from here.
    - Changing SCHEMA_DOCUMENT_NAME breaks round trips with previously saved feeds.
"""

from __future__ import annotations

__all__ = [
    "SCHEMA_DOCUMENT_NAME",
    "DEFAULT_DELIMITER",
    "DEFAULT_ENCODING",
    "ARCHIVE_SUFFIX",
    "SOURCE_PATTERN",
    "SERVICES_TABLE",
    "SEED_TABLES",
]

# Structural-only description of the feed tables, written next to the data files.
SCHEMA_DOCUMENT_NAME: str = "feed.schema.json"

DEFAULT_DELIMITER: str = ","

DEFAULT_ENCODING: str = "utf-8"

# Sources and destinations ending with this suffix (case-insensitive) are zip archives.
ARCHIVE_SUFFIX: str = ".zip"

# Glob applied to directory sources ("*" = every regular file).
SOURCE_PATTERN: str = "*"

# Synthetic table collecting every service id referenced by the calendar and trips.
SERVICES_TABLE: str = "services"

SEED_TABLES: tuple[str, ...] = (SERVICES_TABLE,)
