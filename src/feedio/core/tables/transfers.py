"""
Built-in descriptor for 'transfers.txt'.

Schema:
- primary key: none
- parents: stops.txt twice (from_stop_id, to_stop_id)
"""

from __future__ import annotations

from ..grammar import RelationDescriptor, SemanticType, TableDescriptor, columns_of

TRANSFERS_DESC = TableDescriptor(
    name="transfers.txt",
    columns=columns_of(
        {
            "from_stop_id": SemanticType.TEXT,
            "to_stop_id": SemanticType.TEXT,
            "transfer_type": SemanticType.TEXT,
            "min_transfer_time": SemanticType.INTEGER,
        }
    ),
    relations=(
        RelationDescriptor("stops.txt", ("from_stop_id",), ("stop_id",)),
        RelationDescriptor("stops.txt", ("to_stop_id",), ("stop_id",)),
    ),
    is_built_in=True,
)
