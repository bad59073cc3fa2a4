"""
Built-in descriptor for 'stops.txt'.

Purpose:
- Stops, stations, and station entrances where vehicles pick up or drop off riders.

Schema:
- primary key: stop_id
- parents: none (parent_station is a self reference and does not order imports)
"""

from __future__ import annotations

from ..grammar import SemanticType, TableDescriptor, columns_of

STOPS_DESC = TableDescriptor(
    name="stops.txt",
    columns=columns_of(
        {
            "stop_id": SemanticType.TEXT,
            "stop_code": SemanticType.TEXT,
            "stop_name": SemanticType.TEXT,
            "stop_desc": SemanticType.TEXT,
            "stop_lat": SemanticType.DECIMAL,
            "stop_lon": SemanticType.DECIMAL,
            "zone_id": SemanticType.TEXT,
            "stop_url": SemanticType.TEXT,
            "location_type": SemanticType.TEXT,
            "parent_station": SemanticType.TEXT,
            "stop_timezone": SemanticType.TEXT,
            "wheelchair_boarding": SemanticType.TEXT,
            "level_id": SemanticType.TEXT,
            "platform_code": SemanticType.TEXT,
        }
    ),
    primary_key=("stop_id",),
    is_built_in=True,
)
