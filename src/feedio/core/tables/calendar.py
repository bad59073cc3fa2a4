"""
Built-in descriptors for 'calendar.txt' and 'calendar_dates.txt'.

Schema:
- calendar.txt: weekly service pattern; primary key service_id.
- calendar_dates.txt: service exceptions; primary key (service_id, date).
- parents: services (service_id) for both.
"""

from __future__ import annotations

from ..constants import SERVICES_TABLE
from ..grammar import RelationDescriptor, SemanticType, TableDescriptor, columns_of

_SERVICE = RelationDescriptor(SERVICES_TABLE, ("service_id",))

CALENDAR_DESC = TableDescriptor(
    name="calendar.txt",
    columns=columns_of(
        {
            "service_id": SemanticType.TEXT,
            "monday": SemanticType.BOOLEAN,
            "tuesday": SemanticType.BOOLEAN,
            "wednesday": SemanticType.BOOLEAN,
            "thursday": SemanticType.BOOLEAN,
            "friday": SemanticType.BOOLEAN,
            "saturday": SemanticType.BOOLEAN,
            "sunday": SemanticType.BOOLEAN,
            "start_date": SemanticType.DATE,
            "end_date": SemanticType.DATE,
        }
    ),
    primary_key=("service_id",),
    relations=(_SERVICE,),
    is_built_in=True,
)

CALENDAR_DATES_DESC = TableDescriptor(
    name="calendar_dates.txt",
    columns=columns_of(
        {
            "service_id": SemanticType.TEXT,
            "date": SemanticType.DATE,
            "exception_type": SemanticType.TEXT,
        }
    ),
    primary_key=("service_id", "date"),
    relations=(_SERVICE,),
    is_built_in=True,
)
