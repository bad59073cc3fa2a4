"""
Feed container: schema registry plus table data, imported from and saved to a
directory or a zip archive.

Lifecycle
- Feed() starts EMPTY: every registry table exists, with no rows.
- Feed(path) imports and ends LOADED whatever the path is. Unusable sources
  (empty, malformed, missing, not a zip) import nothing.
- save(path) writes every table that has rows and is not excluded from data
  export; when any custom table exists the schema document is written too.
  Saving is repeatable and leaves the feed LOADED.

Import steps
1. open the source (feedio.io.source)
2. merge the schema document if the source carries one
3. order the remaining names (feedio.core.resolve), seeding 'services'
4. decode each table in order (feedio.io.read)
5. close every stream and the archive, on every exit path

Notes
- There is no rollback. A decode failure leaves earlier tables (and earlier rows
  of the failing table) in place; a save failure leaves a partial destination.
"""

from __future__ import annotations

import codecs
import logging
import os
import zipfile
from collections.abc import Iterable, Iterator
from enum import Enum

from feedio.core.constants import SEED_TABLES
from feedio.core.errors import SchemaError
from feedio.core.grammar import ColumnDescriptor, TableDescriptor
from feedio.core.registry import SchemaRegistry, default_registry
from feedio.core.resolve import resolve
from feedio.core.schema import SchemaDocument

from . import fs
from .config import FeedSettings
from .document import dump_document, load_document
from .errors import FeedWriteError, RowConflictError
from .read import DecodeReport, RowHook, decode
from .source import FeedSource, open_source
from .table import Table
from .write import encode

logger = logging.getLogger(__name__)

__all__ = ["Feed", "FeedState"]


class FeedState(str, Enum):
    EMPTY = "empty"
    LOADED = "loaded"


class Feed:
    """
    In-memory feed bound to a schema registry.

    Args:
        path: Optional directory or archive to import.
        settings (FeedSettings | None): Codec/source settings (defaults if None).
        registry (SchemaRegistry | None): Initial registry (built-in GTFS tables if None).

    Raises:
        FieldParseError: A non-duration field of some table failed to parse.
        SchemaDocumentError: The source carries a malformed schema document.
        VersionMismatch: The source's schema document has an unsupported version.

    Examples:
        >>> feed = Feed()
        >>> feed.state.value, len(feed["agency.txt"])
        ('empty', 0)
    """

    def __init__(
        self,
        path: str | os.PathLike[str] | None = None,
        *,
        settings: FeedSettings | None = None,
        registry: SchemaRegistry | None = None,
    ) -> None:
        self.settings = settings or FeedSettings()
        initial = registry if registry is not None else default_registry()
        self._tables: dict[str, Table] = {d.name: Table(d) for d in initial.descriptors()}
        self.import_reports: dict[str, DecodeReport] = {}
        self.state = FeedState.EMPTY
        if path is not None:
            self._import(path)

    def __repr__(self) -> str:
        loaded = sum(1 for t in self._tables.values() if len(t))
        return f"Feed(state={self.state.value!r}, tables={len(self._tables)}, non_empty={loaded})"

    def __getitem__(self, name: str) -> Table:
        return self._tables[name]

    def __contains__(self, name: object) -> bool:
        return name in self._tables

    def __iter__(self) -> Iterator[str]:
        return iter(self._tables)

    # ---------------------------------------------------------------------
    # Schema
    # ---------------------------------------------------------------------
    @property
    def registry(self) -> SchemaRegistry:
        """Registry view built from the current table descriptors."""
        return SchemaRegistry(t.descriptor for t in self._tables.values())

    @property
    def tables(self) -> dict[str, Table]:
        return dict(self._tables)

    def table(self, name: str) -> Table | None:
        return self._tables.get(name)

    def has_custom_tables(self) -> bool:
        return any(not t.descriptor.is_built_in for t in self._tables.values())

    def add_table(
        self,
        table: TableDescriptor | str,
        columns: Iterable[ColumnDescriptor | str] | None = None,
    ) -> Table:
        """
        Register a custom table and return its (empty) Table.

        Args:
            table: A descriptor, or a table name to build one from ``columns``.
            columns: Column descriptors or names (names default to text).

        Raises:
            SchemaError: Name already registered, or both a descriptor and columns given.
        """
        if isinstance(table, TableDescriptor):
            if columns is not None:
                raise SchemaError("pass columns only together with a table name")
            desc = table
        else:
            desc = TableDescriptor(
                name=table,
                columns=tuple(
                    c if isinstance(c, ColumnDescriptor) else ColumnDescriptor(c)
                    for c in (columns or ())
                ),
            )
        self.registry.with_table(desc)
        self._tables[desc.name] = Table(desc)
        logger.debug(f"Registered table {desc.name} with {len(desc.columns)} columns")
        return self._tables[desc.name]

    def merge_schema(self, document: SchemaDocument) -> None:
        """
        Merge a schema document: new tables are created, known tables gain any
        columns and relations they lack (existing rows get nulls).

        Raises:
            VersionMismatch: Unsupported document version.
        """
        merged = self.registry.merge(document)
        added = 0
        for desc in merged.descriptors():
            current = self._tables.get(desc.name)
            if current is None:
                self._tables[desc.name] = Table(desc)
                added += 1
            elif current.descriptor != desc:
                current.extend_schema(desc)
        logger.info(f"Merged schema document: {len(document.tables)} tables, {added} new")

    def schema_document(self) -> SchemaDocument:
        """Structural description of every table not excluded from schema export."""
        return SchemaDocument.from_descriptors(t.descriptor for t in self._tables.values())

    # ---------------------------------------------------------------------
    # Import
    # ---------------------------------------------------------------------
    def _import(self, path: str | os.PathLike[str]) -> None:
        with open_source(path, self.settings) as source:
            self._import_source(source)
        self.state = FeedState.LOADED

    def _import_source(self, source: FeedSource) -> None:
        doc_name = self.settings.schema_document_name
        if doc_name in source:
            self.merge_schema(load_document(source.open(doc_name)))

        names = [n for n in source if n != doc_name]
        unknown = [n for n in names if n not in self._tables]
        if unknown:
            logger.debug(f"Skipping files without a table: {unknown!r}")

        for name in resolve(names, self.registry, seeds=SEED_TABLES):
            table = self._tables[name]
            logger.info(f"Reading table {name}")
            report = decode(
                source.open(name),
                table,
                self.settings.delimiter,
                encoding=self._read_encoding(),
                row_hook=self._seed_hook(table.descriptor),
            )
            self.import_reports[name] = report
            if report.rows_dropped:
                logger.warning(f"{name}: dropped {report.rows_dropped} conflicting rows")

    def _read_encoding(self) -> str:
        # UTF-8 sources may start with a BOM
        encoding = self.settings.encoding
        return "utf-8-sig" if codecs.lookup(encoding).name == "utf-8" else encoding

    def _seed_hook(self, desc: TableDescriptor) -> RowHook | None:
        links = []
        for rel in desc.relations:
            if rel.parent not in SEED_TABLES or rel.parent not in self._tables:
                continue
            seed = self._tables[rel.parent]
            missing = [c for c in rel.parent_columns if not seed.descriptor.has_column(c)]
            if missing:
                logger.debug(
                    f"{desc.name}: not registering into {rel.parent}, no columns {missing!r}"
                )
                continue
            links.append((seed, rel))
        if not links:
            return None

        def register(row: dict) -> None:
            for seed, rel in links:
                key = tuple(row.get(c) for c in rel.child_columns)
                if any(v is None for v in key):
                    continue
                try:
                    seed.append(dict(zip(rel.parent_columns, key)))
                except RowConflictError:
                    continue  # already registered

        return register

    # ---------------------------------------------------------------------
    # Export
    # ---------------------------------------------------------------------
    def exportable_tables(self) -> list[Table]:
        """Tables with at least one row that are not excluded from data export."""
        return [
            t for t in self._tables.values() if len(t) and not t.descriptor.exclude_from_data_export
        ]

    def save(self, path: str | os.PathLike[str]) -> list[str]:
        """
        Save the feed to an archive (by suffix) or a directory (created if absent).

        Returns:
            list[str]: Names of the entries written, in write order.

        Raises:
            FeedWriteError: The destination could not be written.
            CodecError: A value could not be encoded.
        """
        location = os.fspath(path)
        tables = self.exportable_tables()
        document = self.schema_document() if self.has_custom_tables() else None
        try:
            if self.settings.is_archive(location):
                written = self._save_archive(location, tables, document)
            else:
                written = self._save_directory(location, tables, document)
        except OSError as exc:
            raise FeedWriteError(f"cannot save feed to {location!r}: {exc}") from exc
        logger.info(f"Saved {len(written)} entries to {location}")
        self.state = FeedState.LOADED
        return written

    def _encode(self, table: Table, stream) -> None:
        encode(
            table,
            stream,
            self.settings.delimiter,
            encoding=self.settings.encoding,
            lineterminator=self.settings.lineterminator,
        )

    def _save_archive(
        self, path: str, tables: list[Table], document: SchemaDocument | None
    ) -> list[str]:
        compression = zipfile.ZIP_DEFLATED if self.settings.compress_archive else zipfile.ZIP_STORED
        parent = os.path.dirname(path)
        if parent:
            fs.makedirs(parent)
        written: list[str] = []
        with zipfile.ZipFile(path, "w", compression=compression) as archive:
            for table in tables:
                with archive.open(table.name, "w") as entry:
                    self._encode(table, entry)
                written.append(table.name)
            if document is not None:
                archive.writestr(self.settings.schema_document_name, dump_document(document))
                written.append(self.settings.schema_document_name)
        return written

    def _save_directory(
        self, path: str, tables: list[Table], document: SchemaDocument | None
    ) -> list[str]:
        fs.makedirs(path)
        written: list[str] = []
        for table in tables:
            with fs.open_write(os.path.join(path, table.name)) as fh:
                self._encode(table, fh)
            written.append(table.name)
        if document is not None:
            with fs.open_write(os.path.join(path, self.settings.schema_document_name)) as fh:
                fh.write(dump_document(document))
            written.append(self.settings.schema_document_name)
        return written
