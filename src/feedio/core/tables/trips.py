"""
Built-in descriptors for 'trips.txt', 'stop_times.txt', and 'frequencies.txt'.

Schema:
- trips.txt: primary key trip_id; parents routes.txt (route_id), services (service_id).
- stop_times.txt: primary key (trip_id, stop_sequence); parents trips.txt, stops.txt.
- frequencies.txt: primary key (trip_id, start_time); parent trips.txt.

Notes:
- arrival/departure/start/end times are durations: "25:30:10" is a legal
  after-midnight time on the service day.
"""

from __future__ import annotations

from ..constants import SERVICES_TABLE
from ..grammar import RelationDescriptor, SemanticType, TableDescriptor, columns_of

TRIPS_DESC = TableDescriptor(
    name="trips.txt",
    columns=columns_of(
        {
            "route_id": SemanticType.TEXT,
            "service_id": SemanticType.TEXT,
            "trip_id": SemanticType.TEXT,
            "trip_headsign": SemanticType.TEXT,
            "trip_short_name": SemanticType.TEXT,
            "direction_id": SemanticType.TEXT,
            "block_id": SemanticType.TEXT,
            "shape_id": SemanticType.TEXT,
            "wheelchair_accessible": SemanticType.TEXT,
            "bikes_allowed": SemanticType.TEXT,
        }
    ),
    primary_key=("trip_id",),
    relations=(
        RelationDescriptor("routes.txt", ("route_id",)),
        RelationDescriptor(SERVICES_TABLE, ("service_id",)),
    ),
    is_built_in=True,
)

STOP_TIMES_DESC = TableDescriptor(
    name="stop_times.txt",
    columns=columns_of(
        {
            "trip_id": SemanticType.TEXT,
            "arrival_time": SemanticType.DURATION,
            "departure_time": SemanticType.DURATION,
            "stop_id": SemanticType.TEXT,
            "stop_sequence": SemanticType.INTEGER,
            "stop_headsign": SemanticType.TEXT,
            "pickup_type": SemanticType.TEXT,
            "drop_off_type": SemanticType.TEXT,
            "shape_dist_traveled": SemanticType.DECIMAL,
            "timepoint": SemanticType.TEXT,
        }
    ),
    primary_key=("trip_id", "stop_sequence"),
    relations=(
        RelationDescriptor("trips.txt", ("trip_id",)),
        RelationDescriptor("stops.txt", ("stop_id",)),
    ),
    is_built_in=True,
)

FREQUENCIES_DESC = TableDescriptor(
    name="frequencies.txt",
    columns=columns_of(
        {
            "trip_id": SemanticType.TEXT,
            "start_time": SemanticType.DURATION,
            "end_time": SemanticType.DURATION,
            "headway_secs": SemanticType.INTEGER,
            "exact_times": SemanticType.TEXT,
        }
    ),
    primary_key=("trip_id", "start_time"),
    relations=(RelationDescriptor("trips.txt", ("trip_id",)),),
    is_built_in=True,
)
