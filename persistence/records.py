from __future__ import annotations

import logging
from typing import Any, Mapping

from json_store import dump_record, load_record
from services.errors import MalformedRecordError

from .interfaces import KeyValueStore

logger = logging.getLogger(__name__)


def record_key(collection: str, record_id: Any) -> str:
    return f"{collection}:{record_id}"


def index_key(collection: str) -> str:
    return f"{collection}:index"


class RecordRepository:
    """
    Stores JSON records per collection with a manual id index:

    - {collection}:{id}   -> serialized record
    - {collection}:index  -> set of every id ever saved into the collection

    The two writes in save() are not atomic. A crash between them leaves a
    record without index entry (invisible to list_all) or, for concurrent
    readers, an index entry whose record is not visible yet.
    """

    def __init__(self, store: KeyValueStore):
        self._store = store

    @property
    def store(self) -> KeyValueStore:
        return self._store

    def save(self, collection: str, record_id: Any, record: Mapping[str, Any]) -> str:
        payload = dump_record(record)
        key = record_key(collection, record_id)
        self._store.set(key, payload)
        self._store.add_to_set(index_key(collection), str(record_id))
        return key

    def get(self, collection: str, record_id: Any) -> Any | None:
        key = record_key(collection, record_id)
        raw = self._store.get(key)
        if raw is None:
            return None
        try:
            return load_record(raw)
        except MalformedRecordError as e:
            raise MalformedRecordError(f"{key}: {e.message}") from e

    def list_all(self, collection: str) -> list[Any]:
        ids = self._store.set_members(index_key(collection))
        if not ids:
            return []

        records: list[Any] = []
        for record_id in sorted(ids, key=_id_sort_key):
            record = self.get(collection, record_id)
            if record is None:
                # indexed but absent: skip, never repair
                logger.warning("LIST %s: id %s is indexed but has no record", collection, record_id)
                continue
            records.append(record)
        return records

    def index_ids(self, collection: str) -> set[str]:
        return self._store.set_members(index_key(collection))


def _id_sort_key(record_id: str) -> tuple[int, int, str]:
    # numeric ids first, in numeric order; then everything else lexically
    if record_id.isdigit():
        return (0, int(record_id), "")
    return (1, 0, record_id)
