"""
Built-in descriptor for 'shapes.txt'.

Schema:
- primary key: (shape_id, shape_pt_sequence)
- parents: none
"""

from __future__ import annotations

from ..grammar import SemanticType, TableDescriptor, columns_of

SHAPES_DESC = TableDescriptor(
    name="shapes.txt",
    columns=columns_of(
        {
            "shape_id": SemanticType.TEXT,
            "shape_pt_lat": SemanticType.DECIMAL,
            "shape_pt_lon": SemanticType.DECIMAL,
            "shape_pt_sequence": SemanticType.INTEGER,
            "shape_dist_traveled": SemanticType.DECIMAL,
        }
    ),
    primary_key=("shape_id", "shape_pt_sequence"),
    is_built_in=True,
)
