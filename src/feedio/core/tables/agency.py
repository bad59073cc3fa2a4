"""
Built-in descriptor for 'agency.txt'.

Purpose:
- Transit agencies providing the services described by the feed.

Schema:
- primary key: agency_id (optional in single-agency feeds; null keys never conflict)
- parents: none
"""

from __future__ import annotations

from ..grammar import SemanticType, TableDescriptor, columns_of

AGENCY_DESC = TableDescriptor(
    name="agency.txt",
    columns=columns_of(
        {
            "agency_id": SemanticType.TEXT,
            "agency_name": SemanticType.TEXT,
            "agency_url": SemanticType.TEXT,
            "agency_timezone": SemanticType.TEXT,
            "agency_lang": SemanticType.TEXT,
            "agency_phone": SemanticType.TEXT,
            "agency_fare_url": SemanticType.TEXT,
            "agency_email": SemanticType.TEXT,
        }
    ),
    primary_key=("agency_id",),
    is_built_in=True,
)
