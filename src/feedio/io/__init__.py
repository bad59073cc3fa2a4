"""
feedio.io: IO layer for delimited-text feeds.

## Responsibilities
- Map a directory or zip archive to named byte streams (source).
- Decode delimited text into typed in-memory tables and encode them back (read/write).
- Orchestrate schema merge, ordered import, and filtered export (feed).
- Keep feedio.core as the single source of truth for table descriptors, the
  registry, the schema document model, and import ordering.

## Public API
- FeedSettings: configuration (defaults sourced from feedio.core.constants).
- Feed, FeedState: the feed container.
- Table: in-memory table.
- decode / encode, DecodeReport: the codec.
- open_source, FeedSource: the source adapter.

## Import DAG discipline
- Depends only on stdlib, polars, pydantic (via feedio.core), and feedio.core.*.

## Examples
```python
from feedio.io import Feed

feed = Feed("gtfs.zip")  # doctest: +SKIP
feed["agency.txt"].to_frame()  # doctest: +SKIP
feed.save("out/")  # doctest: +SKIP
```

## Notes
- Unusable sources never raise; they import nothing.
- Duplicate-key rows and unparseable durations are absorbed during decode and
  recorded in Feed.import_reports.
"""

from __future__ import annotations

from .config import FeedSettings
from .feed import Feed, FeedState
from .read import AnomalyKind, DecodeAnomaly, DecodeReport, decode
from .source import FeedSource, open_source
from .table import Table
from .write import encode

__all__ = [
    "FeedSettings",
    "Feed",
    "FeedState",
    "Table",
    "AnomalyKind",
    "DecodeAnomaly",
    "DecodeReport",
    "decode",
    "encode",
    "FeedSource",
    "open_source",
]
