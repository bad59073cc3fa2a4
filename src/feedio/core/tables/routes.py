"""
Built-in descriptor for 'routes.txt'.

Schema:
- primary key: route_id
- parents: agency.txt (agency_id)

Notes:
- route_type is kept as text ("3" for bus); it is an enumerated code, not a quantity.
"""

from __future__ import annotations

from ..grammar import RelationDescriptor, SemanticType, TableDescriptor, columns_of

ROUTES_DESC = TableDescriptor(
    name="routes.txt",
    columns=columns_of(
        {
            "route_id": SemanticType.TEXT,
            "agency_id": SemanticType.TEXT,
            "route_short_name": SemanticType.TEXT,
            "route_long_name": SemanticType.TEXT,
            "route_desc": SemanticType.TEXT,
            "route_type": SemanticType.TEXT,
            "route_url": SemanticType.TEXT,
            "route_color": SemanticType.TEXT,
            "route_text_color": SemanticType.TEXT,
            "route_sort_order": SemanticType.INTEGER,
        }
    ),
    primary_key=("route_id",),
    relations=(RelationDescriptor("agency.txt", ("agency_id",)),),
    is_built_in=True,
)
