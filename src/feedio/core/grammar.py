"""
Canonical feed grammar: semantic column types and frozen table descriptors.

Defines the tagged variant of column semantic types that drives both decode and
encode, plus the descriptors (columns, primary key, parent relations, export
flags) that every table in a schema registry is described by.

Responsibilities
- Define the SemanticType enum and normalize type names from schema documents,
  including the legacy CLR type names older documents carry ("Int32", "TimeSpan", ...).
- Define ColumnDescriptor, RelationDescriptor, and TableDescriptor with their
  structural invariants (unique columns, key/relation columns exist).
- Provide small helpers used by table modules and tests.

Design principles
-----------------
1) One naming standard:
   - Enum classes: PascalCase
   - Enum member names: UPPER_SNAKE
   - Enum serialized values (schema documents): lower_snake
   - Table names are file names ("stop_times.txt"); column names are lower_snake
     for built-in tables and free-form for custom tables.

2) Relations order imports, they do not constrain data:
   - A RelationDescriptor records that a child table references a parent table.
     Decoders never reject rows because a parent row is missing.

Examples
--------
>>> from feedio.core.grammar import SemanticType, semantic_type_from_value
>>> semantic_type_from_value("TimeSpan") is SemanticType.DURATION
True
>>> semantic_type_from_value("decimal").value
'decimal'
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import Enum

from .errors import GrammarError, SchemaError

__all__ = [
    "SemanticType",
    "ColumnDescriptor",
    "RelationDescriptor",
    "TableDescriptor",
    "semantic_type_from_value",
    "columns_of",
]


class SemanticType(str, Enum):
    """
    Semantic type of a feed column.

    Members:
        BOOLEAN: 0/1 flags.
        DATE: Calendar day serialized as YYYYMMDD.
        DECIMAL: Fixed-point numeric (coordinates, prices, distances).
        INTEGER: Base-10 integer.
        DURATION: Time of day that may exceed 24 hours, serialized as H+:MM:SS.
        TEXT: Verbatim string.
    """

    BOOLEAN = "boolean"
    DATE = "date"
    DECIMAL = "decimal"
    INTEGER = "integer"
    DURATION = "duration"
    TEXT = "text"


# Accepted spellings, including CLR names found in older schema documents.
_LEGACY_TYPE_NAMES: dict[str, SemanticType] = {
    "boolean": SemanticType.BOOLEAN,
    "bool": SemanticType.BOOLEAN,
    "datetime": SemanticType.DATE,
    "date": SemanticType.DATE,
    "decimal": SemanticType.DECIMAL,
    "double": SemanticType.DECIMAL,
    "single": SemanticType.DECIMAL,
    "byte": SemanticType.INTEGER,
    "int16": SemanticType.INTEGER,
    "int32": SemanticType.INTEGER,
    "int64": SemanticType.INTEGER,
    "int": SemanticType.INTEGER,
    "integer": SemanticType.INTEGER,
    "timespan": SemanticType.DURATION,
    "duration": SemanticType.DURATION,
    "string": SemanticType.TEXT,
    "str": SemanticType.TEXT,
    "text": SemanticType.TEXT,
}


def semantic_type_from_value(value: SemanticType | str) -> SemanticType:
    """
    Normalize a type name to SemanticType.

    Args:
        value (SemanticType | str): Enum member, lower_snake value, or legacy CLR
            type name (case-insensitive, optional "System." prefix).

    Returns:
        SemanticType: Normalized member.

    Raises:
        GrammarError: If the name is not recognized.
    """
    if isinstance(value, SemanticType):
        return value
    key = str(value).strip().lower()
    if key.startswith("system."):
        key = key[len("system.") :]
    try:
        return _LEGACY_TYPE_NAMES[key]
    except KeyError as exc:
        raise GrammarError(f"unknown semantic type {value!r}") from exc


@dataclass(frozen=True)
class ColumnDescriptor:
    """
    A named, typed column.

    Attributes:
        name (str): Column name as it appears in the file header.
        type (SemanticType): Semantic type (default TEXT).
    """

    name: str
    type: SemanticType = SemanticType.TEXT

    def __post_init__(self) -> None:
        if not self.name:
            raise SchemaError("column name must be non-empty")
        object.__setattr__(self, "type", semantic_type_from_value(self.type))


@dataclass(frozen=True)
class RelationDescriptor:
    """
    Directed child -> parent edge used to order imports.

    Attributes:
        parent (str): Parent table name.
        child_columns (tuple[str, ...]): Join columns on the child table.
        parent_columns (tuple[str, ...]): Matching key columns on the parent table
            (defaults to child_columns).
    """

    parent: str
    child_columns: tuple[str, ...]
    parent_columns: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "child_columns", tuple(self.child_columns))
        object.__setattr__(
            self, "parent_columns", tuple(self.parent_columns) or tuple(self.child_columns)
        )
        if not self.child_columns:
            raise SchemaError(f"relation to {self.parent!r} declares no join columns")
        if len(self.child_columns) != len(self.parent_columns):
            raise SchemaError(
                f"relation to {self.parent!r} pairs {len(self.child_columns)} child columns "
                f"with {len(self.parent_columns)} parent columns"
            )


@dataclass(frozen=True)
class TableDescriptor:
    """
    Frozen descriptor for a feed table.

    Attributes:
        name (str): Table name; also the file/entry name on disk.
        columns (tuple[ColumnDescriptor, ...]): Ordered columns.
        primary_key (tuple[str, ...]): Columns whose non-null values must be unique.
        relations (tuple[RelationDescriptor, ...]): Parent relations.
        exclude_from_data_export (bool): Never written as a data file.
        exclude_from_schema_export (bool): Never listed in a schema document.
        is_built_in (bool): Part of the default registry (vs. a custom table).

    Notes:
        - Column names are unique; primary_key and relation child columns are
          subsets of the column names.
        - Use with_columns / with_relations to derive extended descriptors.
    """

    name: str
    columns: tuple[ColumnDescriptor, ...]
    primary_key: tuple[str, ...] = ()
    relations: tuple[RelationDescriptor, ...] = ()
    exclude_from_data_export: bool = False
    exclude_from_schema_export: bool = False
    is_built_in: bool = False
    _index: dict[str, int] = field(init=False, repr=False, compare=False, hash=False)

    def __post_init__(self) -> None:
        if not self.name:
            raise SchemaError("table name must be non-empty")
        object.__setattr__(self, "columns", tuple(self.columns))
        object.__setattr__(self, "primary_key", tuple(self.primary_key))
        object.__setattr__(self, "relations", tuple(self.relations))
        index: dict[str, int] = {}
        for position, column in enumerate(self.columns):
            if column.name in index:
                raise SchemaError(f"duplicate column {column.name!r} in table {self.name!r}")
            index[column.name] = position
        object.__setattr__(self, "_index", index)
        missing = [c for c in self.primary_key if c not in index]
        if missing:
            raise SchemaError(f"primary key columns {missing!r} not in table {self.name!r}")
        for rel in self.relations:
            unknown = [c for c in rel.child_columns if c not in index]
            if unknown:
                raise SchemaError(
                    f"relation {self.name!r} -> {rel.parent!r} uses unknown columns {unknown!r}"
                )

    @property
    def column_names(self) -> tuple[str, ...]:
        return tuple(c.name for c in self.columns)

    @property
    def parents(self) -> tuple[str, ...]:
        """Parent table names in declaration order (duplicates removed)."""
        return tuple(dict.fromkeys(rel.parent for rel in self.relations))

    def has_column(self, name: str) -> bool:
        return name in self._index

    def column(self, name: str) -> ColumnDescriptor:
        try:
            return self.columns[self._index[name]]
        except KeyError as exc:
            raise SchemaError(f"table {self.name!r} has no column {name!r}") from exc

    def with_columns(self, *columns: ColumnDescriptor) -> TableDescriptor:
        """Return a copy with any columns not already present appended."""
        extra = tuple(c for c in columns if c.name not in self._index)
        if not extra:
            return self
        return replace(self, columns=self.columns + extra)

    def with_relations(self, *relations: RelationDescriptor) -> TableDescriptor:
        """Return a copy with any relations not already present appended."""
        extra = tuple(r for r in dict.fromkeys(relations) if r not in self.relations)
        if not extra:
            return self
        return replace(self, relations=self.relations + extra)


def columns_of(mapping: Mapping[str, SemanticType | str]) -> tuple[ColumnDescriptor, ...]:
    """
    Build ordered column descriptors from a name -> type mapping.

    Examples:
        >>> [c.name for c in columns_of({"a": "text", "b": SemanticType.INTEGER})]
        ['a', 'b']
    """
    return tuple(ColumnDescriptor(name, semantic_type_from_value(t)) for name, t in mapping.items())
