"""
Persisted schema document: JSON bytes <-> feedio.core.schema.SchemaDocument.

Layout (JSON, UTF-8, name settings.schema_document_name):
{
  "version": "1.0",
  "tables": [
    {
      "name": "test1.csv",
      "columns": [{"name": "field1", "type": "text"}],
      "primary_key": [],
      "relations": [],
      "exclude_from_data_export": false
    }
  ]
}
"""

from __future__ import annotations

import json
from typing import IO

from pydantic import ValidationError

from feedio.core.schema import SchemaDocument

from .errors import SchemaDocumentError

__all__ = ["load_document", "dump_document"]


def load_document(stream: IO[bytes]) -> SchemaDocument:
    """
    Read and validate a schema document; the stream is closed.

    Raises:
        SchemaDocumentError: Undecodable bytes, malformed JSON, or invalid structure.
    """
    try:
        raw = stream.read()
    finally:
        stream.close()
    try:
        data = json.loads(raw.decode("utf-8-sig"))
        return SchemaDocument.model_validate(data)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise SchemaDocumentError(f"schema document is not valid JSON: {exc}") from exc
    except ValidationError as exc:
        raise SchemaDocumentError(f"schema document is invalid: {exc}") from exc


def dump_document(document: SchemaDocument) -> bytes:
    """Serialize a schema document to indented UTF-8 JSON."""
    payload = json.dumps(document.model_dump(mode="json"), indent=2, sort_keys=False)
    return (payload + "\n").encode("utf-8")
