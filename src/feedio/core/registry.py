"""
Schema registry: the metadata store describing every known feed table.

The registry is an immutable mapping of table name -> TableDescriptor. Extending
it (merging a schema document, registering a custom table) returns a new
registry; nothing here mutates shared state.

Notes:
    - default_registry() holds the built-in GTFS tables (feedio.core.tables).
    - merge() never removes tables, columns, or relations and never changes
      flags, primary keys, or the type of an existing column.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from .errors import SchemaError
from .grammar import TableDescriptor
from .schema import SchemaDocument
from .tables import list_tables
from .versioning import ensure_compatible

__all__ = [
    "SchemaRegistry",
    "default_registry",
]


class SchemaRegistry(Mapping[str, TableDescriptor]):
    """
    Immutable, insertion-ordered mapping of table name -> descriptor.

    Examples:
        >>> reg = default_registry()
        >>> "stop_times.txt" in reg and reg["stop_times.txt"].parents
        ('trips.txt', 'stops.txt')
    """

    __slots__ = ("_tables",)

    def __init__(self, tables: Iterable[TableDescriptor] = ()) -> None:
        self._tables: dict[str, TableDescriptor] = {}
        for desc in tables:
            if desc.name in self._tables:
                raise SchemaError(f"table {desc.name!r} registered twice")
            self._tables[desc.name] = desc

    def __getitem__(self, name: str) -> TableDescriptor:
        return self._tables[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._tables)

    def __len__(self) -> int:
        return len(self._tables)

    def __repr__(self) -> str:
        return f"SchemaRegistry({list(self._tables)!r})"

    def descriptors(self) -> list[TableDescriptor]:
        return list(self._tables.values())

    def with_table(self, desc: TableDescriptor) -> SchemaRegistry:
        """
        Return a new registry with ``desc`` appended.

        Raises:
            SchemaError: If a table with the same name already exists.
        """
        if desc.name in self._tables:
            raise SchemaError(f"table {desc.name!r} already registered")
        return SchemaRegistry([*self._tables.values(), desc])

    def merge(self, document: SchemaDocument) -> SchemaRegistry:
        """
        Return a new registry extended with the tables of ``document``.

        Args:
            document (SchemaDocument): Parsed schema document.

        Returns:
            SchemaRegistry: Unknown tables are added as custom tables; known
            tables gain any columns and relations they did not declare.

        Raises:
            VersionMismatch: If the document major version is unsupported.
        """
        ensure_compatible(document.document_version)
        tables = dict(self._tables)
        for spec in document.tables:
            incoming = spec.to_descriptor(is_built_in=False)
            current = tables.get(spec.name)
            if current is None:
                tables[spec.name] = incoming
            else:
                tables[spec.name] = current.with_columns(*incoming.columns).with_relations(
                    *incoming.relations
                )
        return SchemaRegistry(tables.values())

    def to_document(self) -> SchemaDocument:
        """Schema document of every table not flagged exclude_from_schema_export."""
        return SchemaDocument.from_descriptors(self._tables.values())


def default_registry() -> SchemaRegistry:
    """Registry holding the built-in GTFS tables."""
    return SchemaRegistry(list_tables())
