from __future__ import annotations

import asyncio
import logging
import time
from pathlib import Path
from typing import Any, Mapping, Sequence

from pydantic import BaseModel, Field

from json_store import read_import_document
from persistence.repositories import AsyncRecordStore
from services.errors import MalformedRecordError

logger = logging.getLogger(__name__)


class LoadSummary(BaseModel):
    total_inserted: int = 0
    per_collection: dict[str, int] = Field(default_factory=dict)
    elapsed_ms: int = 0

    @property
    def elapsed_seconds(self) -> str:
        return f"{self.elapsed_ms / 1000:.2f}"


class BulkLoader:
    """
    Persist every record of an import document through the record repository.

    No validation beyond the presence of "id" is applied. The first failing
    save aborts the load; records saved before it stay persisted.
    """

    def __init__(self, repository: AsyncRecordStore) -> None:
        self._repo = repository

    async def load(
        self,
        document: Mapping[str, Sequence[Mapping[str, Any]]],
        *,
        started_at: float | None = None,
    ) -> LoadSummary:
        start = time.perf_counter() if started_at is None else started_at
        summary = LoadSummary()

        for collection, records in document.items():
            count = 0
            for position, record in enumerate(records):
                if not isinstance(record, Mapping) or "id" not in record:
                    raise MalformedRecordError(
                        f"{collection}[{position}]: every record must be an object with an id"
                    )
                await self._repo.save(collection, record["id"], record)
                count += 1
                summary.total_inserted += 1
            summary.per_collection[collection] = count
            logger.info("SEED %s: %d records", collection, count)

        summary.elapsed_ms = int(round((time.perf_counter() - start) * 1000))
        logger.info("SEED done: %d records in %dms", summary.total_inserted, summary.elapsed_ms)
        return summary

    async def load_file(self, path: Path) -> LoadSummary:
        start = time.perf_counter()
        logger.info("SEED reading %s", path)
        document = await asyncio.to_thread(read_import_document, path)
        return await self.load(document, started_at=start)
