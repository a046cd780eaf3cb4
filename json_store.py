from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from services.errors import ImportSourceError, MalformedRecordError

BOM = "\ufeff"


def dump_record(record: Any) -> str:
    """
    Serialize a record to the canonical string form kept in the store.
    """
    try:
        return json.dumps(record, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        raise MalformedRecordError(f"record is not JSON-serializable: {e}") from e


def load_record(raw: str) -> Any:
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as e:
        raise MalformedRecordError(f"stored value is not valid JSON: {e}") from e


def read_import_document(path: Path) -> dict[str, list[dict[str, Any]]]:
    """
    Read a bulk-import document from disk.

    Shape: { "<collection>": [ {"id": ..., ...}, ... ], ... }

    A leading byte-order mark is stripped before parsing. Missing, unreadable
    or malformed documents raise ImportSourceError.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ImportSourceError(f"import file not found: {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ImportSourceError(f"import file could not be read: {path}: {e}") from e

    if raw.startswith(BOM):
        raw = raw[len(BOM):]

    try:
        doc = json.loads(raw)
    except ValueError as e:
        raise ImportSourceError(f"import file is not valid JSON: {e}") from e

    if not isinstance(doc, dict):
        raise ImportSourceError("import document must be an object of collection -> records")
    for collection, records in doc.items():
        if not isinstance(records, list):
            raise ImportSourceError(f"collection {collection!r} must be a list of records")
    return doc
