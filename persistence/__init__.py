from __future__ import annotations

from .interfaces import KeyValueStore
from .memory_store import MemoryKeyValueStore
from .records import RecordRepository, index_key, record_key
from .redis_store import RedisKeyValueStore
from .repositories import AsyncRecordRepository, AsyncRecordStore

__all__ = [
    "KeyValueStore",
    "MemoryKeyValueStore",
    "RedisKeyValueStore",
    "RecordRepository",
    "AsyncRecordRepository",
    "AsyncRecordStore",
    "index_key",
    "record_key",
]
