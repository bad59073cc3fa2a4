"""
Pydantic v2 models for the persisted schema document.

A schema document is the structural-only description of a feed (table names,
columns with semantic types, primary keys, parent relations) written next to
the data files whenever a feed carries custom tables, and merged into the
registry when a feed is read back.

Responsibilities
- Define SchemaDocument / TableSpec / ColumnSpec / RelationSpec.
- Normalize type names to SemanticType via grammar helpers.
- Convert between specs and frozen TableDescriptor instances.

Style
- Zero-IO (stdlib + pydantic only); feedio.io owns reading and writing the bytes.

Examples:
    >>> from feedio.core.schema import SchemaDocument
    >>> doc = SchemaDocument.model_validate(
    ...     {"tables": [{"name": "test1.csv", "columns": [{"name": "field1"}]}]}
    ... )
    >>> doc.tables[0].columns[0].type.value
    'text'
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .grammar import (
    ColumnDescriptor,
    RelationDescriptor,
    SemanticType,
    TableDescriptor,
    semantic_type_from_value,
)
from .versioning import DOCUMENT_V, SchemaVersion, parse_version

__all__ = [
    "ColumnSpec",
    "RelationSpec",
    "TableSpec",
    "SchemaDocument",
]

_VERSION_RE = re.compile(r"^\d+\.\d+$")


class ColumnSpec(BaseModel):
    """
    Column entry of a schema document.

    Attributes:
        name (str): Column name.
        type (SemanticType): Semantic type; legacy CLR names are accepted on input.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1)
    type: SemanticType = SemanticType.TEXT

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, v: Any) -> SemanticType:
        return semantic_type_from_value(v)


class RelationSpec(BaseModel):
    """Parent relation entry; parent_columns default to child_columns."""

    model_config = ConfigDict(extra="forbid")

    parent: str = Field(..., min_length=1)
    child_columns: list[str] = Field(..., min_length=1)
    parent_columns: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_arity(self) -> RelationSpec:
        if self.parent_columns and len(self.parent_columns) != len(self.child_columns):
            raise ValueError(
                f"relation to {self.parent!r}: child/parent column counts differ"
            )
        return self


class TableSpec(BaseModel):
    """
    Table entry of a schema document.

    Raises:
        pydantic.ValidationError: On duplicate columns, or key/relation columns
            that are not declared.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1)
    columns: list[ColumnSpec] = Field(default_factory=list)
    primary_key: list[str] = Field(default_factory=list)
    relations: list[RelationSpec] = Field(default_factory=list)
    exclude_from_data_export: bool = False

    @model_validator(mode="after")
    def _check_columns(self) -> TableSpec:
        names = [c.name for c in self.columns]
        if len(set(names)) != len(names):
            raise ValueError(f"table {self.name!r} declares duplicate columns")
        declared = set(names)
        unknown = [c for c in self.primary_key if c not in declared]
        for rel in self.relations:
            unknown.extend(c for c in rel.child_columns if c not in declared)
        if unknown:
            raise ValueError(f"table {self.name!r} references undeclared columns {unknown!r}")
        return self

    def to_descriptor(self, *, is_built_in: bool = False) -> TableDescriptor:
        return TableDescriptor(
            name=self.name,
            columns=tuple(ColumnDescriptor(c.name, c.type) for c in self.columns),
            primary_key=tuple(self.primary_key),
            relations=tuple(
                RelationDescriptor(r.parent, tuple(r.child_columns), tuple(r.parent_columns))
                for r in self.relations
            ),
            exclude_from_data_export=self.exclude_from_data_export,
            is_built_in=is_built_in,
        )

    @classmethod
    def from_descriptor(cls, desc: TableDescriptor) -> TableSpec:
        return cls(
            name=desc.name,
            columns=[ColumnSpec(name=c.name, type=c.type) for c in desc.columns],
            primary_key=list(desc.primary_key),
            relations=[
                RelationSpec(
                    parent=r.parent,
                    child_columns=list(r.child_columns),
                    parent_columns=list(r.parent_columns),
                )
                for r in desc.relations
            ],
            exclude_from_data_export=desc.exclude_from_data_export,
        )


class SchemaDocument(BaseModel):
    """
    Structural-only description of a set of feed tables.

    Attributes:
        version (str): "<major>.<minor>" of the document layout (see DOCUMENT_V).
        tables (list[TableSpec]): Table definitions; no row data.

    Notes:
        Compatibility is checked when the document is merged
        (SchemaRegistry.merge), not when it is parsed.
    """

    model_config = ConfigDict(extra="forbid")

    version: str = Field(default_factory=lambda: str(DOCUMENT_V))
    tables: list[TableSpec] = Field(default_factory=list)

    @field_validator("version")
    @classmethod
    def _check_version(cls, v: str) -> str:
        if not _VERSION_RE.match(v.strip()):
            raise ValueError(f"version must look like '<major>.<minor>', got {v!r}")
        return v.strip()

    @model_validator(mode="after")
    def _check_unique_tables(self) -> SchemaDocument:
        names = [t.name for t in self.tables]
        if len(set(names)) != len(names):
            raise ValueError("schema document declares a table more than once")
        return self

    @property
    def document_version(self) -> SchemaVersion:
        return parse_version(self.version)

    @classmethod
    def from_descriptors(cls, descriptors: Iterable[TableDescriptor]) -> SchemaDocument:
        """Build a document from descriptors, skipping tables excluded from schema export."""
        return cls(
            tables=[
                TableSpec.from_descriptor(d) for d in descriptors if not d.exclude_from_schema_export
            ]
        )
