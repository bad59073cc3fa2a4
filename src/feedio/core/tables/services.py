"""
Built-in descriptor for the synthetic 'services' seed table.

Purpose:
- Collects every service_id referenced by calendar.txt, calendar_dates.txt, and
  trips.txt so those tables share one parent regardless of which file defines
  the service.

Notes:
- Never read from or written to files (excluded from data and schema export).
- Rows are registered by the feed while decoding child tables.
"""

from __future__ import annotations

from ..constants import SERVICES_TABLE
from ..grammar import SemanticType, TableDescriptor, columns_of

SERVICES_DESC = TableDescriptor(
    name=SERVICES_TABLE,
    columns=columns_of({"service_id": SemanticType.TEXT}),
    primary_key=("service_id",),
    exclude_from_data_export=True,
    exclude_from_schema_export=True,
    is_built_in=True,
)
