"""
feedio: import and export of multi-table delimited-text feeds (GTFS and custom tables).

Subpackages
- feedio.core: zero-IO contracts (semantic types, descriptors, registry, schema document, ordering).
- feedio.io: source adapter, codec, in-memory tables, and the Feed container.
"""

from __future__ import annotations

from feedio.core.registry import SchemaRegistry, default_registry
from feedio.io import Feed, FeedSettings, FeedState, Table

__all__ = [
    "Feed",
    "FeedSettings",
    "FeedState",
    "SchemaRegistry",
    "Table",
    "default_registry",
]

__version__ = "0.1.0"
