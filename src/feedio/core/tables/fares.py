"""
Built-in descriptors for 'fare_attributes.txt' and 'fare_rules.txt'.

Schema:
- fare_attributes.txt: primary key fare_id; parent agency.txt (agency_id).
- fare_rules.txt: no primary key; parents fare_attributes.txt, routes.txt.
"""

from __future__ import annotations

from ..grammar import RelationDescriptor, SemanticType, TableDescriptor, columns_of

FARE_ATTRIBUTES_DESC = TableDescriptor(
    name="fare_attributes.txt",
    columns=columns_of(
        {
            "fare_id": SemanticType.TEXT,
            "price": SemanticType.DECIMAL,
            "currency_type": SemanticType.TEXT,
            "payment_method": SemanticType.TEXT,
            "transfers": SemanticType.TEXT,
            "agency_id": SemanticType.TEXT,
            "transfer_duration": SemanticType.INTEGER,
        }
    ),
    primary_key=("fare_id",),
    relations=(RelationDescriptor("agency.txt", ("agency_id",)),),
    is_built_in=True,
)

FARE_RULES_DESC = TableDescriptor(
    name="fare_rules.txt",
    columns=columns_of(
        {
            "fare_id": SemanticType.TEXT,
            "route_id": SemanticType.TEXT,
            "origin_id": SemanticType.TEXT,
            "destination_id": SemanticType.TEXT,
            "contains_id": SemanticType.TEXT,
        }
    ),
    relations=(
        RelationDescriptor("fare_attributes.txt", ("fare_id",)),
        RelationDescriptor("routes.txt", ("route_id",)),
    ),
    is_built_in=True,
)
