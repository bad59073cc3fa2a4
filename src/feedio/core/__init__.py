"""
Core package aggregator for feed contracts (grammar, descriptors, registry, schema documents, ordering).

## Contracts (single source of truth)
- Grammar: SemanticType enum and frozen Column/Relation/Table descriptors.
- Tables: built-in GTFS descriptors.
- Registry: immutable SchemaRegistry with pure merge/with_table extension.
- Schema: pydantic models of the persisted schema document.
- Resolve: parent-first import ordering with cycle detection.
- Versioning/Constants/Errors: document version, well-known names, exceptions.

## Notes
- Zero-IO policy: stdlib + pydantic only; no file or archive access.
- Relations only order imports; they are never enforced against row data.

## Downstream usage
- feedio.io: builds in-memory tables from registry descriptors, decodes and
  encodes delimited files, and reads/writes schema documents.

## Examples
```python
from feedio.core.registry import default_registry
from feedio.core.resolve import resolve

registry = default_registry()
resolve(["trips.txt", "routes.txt", "agency.txt"], registry)
# ['agency.txt', 'routes.txt', 'trips.txt']
```
"""
