from __future__ import annotations

import asyncio
from typing import Any, Mapping, Protocol

from .interfaces import KeyValueStore
from .records import RecordRepository


class AsyncRecordStore(Protocol):
    async def save(self, collection: str, record_id: Any, record: Mapping[str, Any]) -> str: ...
    async def get(self, collection: str, record_id: Any) -> Any | None: ...
    async def list_all(self, collection: str) -> list[Any]: ...
    async def index_ids(self, collection: str) -> set[str]: ...


class AsyncRecordRepository(AsyncRecordStore):
    """
    Async wrapper around the synchronous record repository.
    Uses asyncio.to_thread to avoid blocking the event loop on store round-trips.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self._repo = RecordRepository(store)

    @property
    def sync(self) -> RecordRepository:
        return self._repo

    async def save(self, collection: str, record_id: Any, record: Mapping[str, Any]) -> str:
        return await asyncio.to_thread(self._repo.save, collection, record_id, record)

    async def get(self, collection: str, record_id: Any) -> Any | None:
        return await asyncio.to_thread(self._repo.get, collection, record_id)

    async def list_all(self, collection: str) -> list[Any]:
        return await asyncio.to_thread(self._repo.list_all, collection)

    async def index_ids(self, collection: str) -> set[str]:
        return await asyncio.to_thread(self._repo.index_ids, collection)
