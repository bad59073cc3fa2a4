"""
Frozen descriptors for the built-in GTFS tables.

Notes:
    - Descriptors declare ordered columns with semantic types, primary keys,
      parent relations, and export flags.
    - Table names are the feed file names; column names are lower_snake.
    - Core is zero-IO (stdlib only); feedio.io materializes tables and files.
"""

from __future__ import annotations

from ..grammar import TableDescriptor
from .agency import AGENCY_DESC
from .calendar import CALENDAR_DATES_DESC, CALENDAR_DESC
from .fares import FARE_ATTRIBUTES_DESC, FARE_RULES_DESC
from .feed_info import FEED_INFO_DESC
from .routes import ROUTES_DESC
from .services import SERVICES_DESC
from .shapes import SHAPES_DESC
from .stops import STOPS_DESC
from .transfers import TRANSFERS_DESC
from .trips import FREQUENCIES_DESC, STOP_TIMES_DESC, TRIPS_DESC

__all__ = [
    "TableDescriptor",
    "AGENCY_DESC",
    "STOPS_DESC",
    "ROUTES_DESC",
    "SERVICES_DESC",
    "CALENDAR_DESC",
    "CALENDAR_DATES_DESC",
    "SHAPES_DESC",
    "TRIPS_DESC",
    "STOP_TIMES_DESC",
    "FREQUENCIES_DESC",
    "TRANSFERS_DESC",
    "FARE_ATTRIBUTES_DESC",
    "FARE_RULES_DESC",
    "FEED_INFO_DESC",
    "get_table",
    "list_tables",
]


# Registry
_TABLES: dict[str, TableDescriptor] = {
    desc.name: desc
    for desc in (
        AGENCY_DESC,
        STOPS_DESC,
        ROUTES_DESC,
        SERVICES_DESC,
        CALENDAR_DESC,
        CALENDAR_DATES_DESC,
        SHAPES_DESC,
        TRIPS_DESC,
        STOP_TIMES_DESC,
        FREQUENCIES_DESC,
        TRANSFERS_DESC,
        FARE_ATTRIBUTES_DESC,
        FARE_RULES_DESC,
        FEED_INFO_DESC,
    )
}


def get_table(name: str) -> TableDescriptor:
    """
    Look up a built-in table descriptor by name.

    Args:
        name (str): Table (file) name, e.g. "stop_times.txt".

    Returns:
        TableDescriptor: Descriptor for the requested table.

    Raises:
        KeyError: If the table is not built in.
    """
    return _TABLES[name]


def list_tables() -> list[TableDescriptor]:
    """
    Return all built-in table descriptors.

    Returns:
        list[TableDescriptor]: Descriptors in registry order.
    """
    return list(_TABLES.values())
