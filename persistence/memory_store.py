from __future__ import annotations

import threading

from .interfaces import KeyValueStore


class MemoryKeyValueStore(KeyValueStore):
    """
    In-process store with the same semantics as the Redis adapter.

    - Values and set members are kept as strings.
    - A single lock guards both maps, so each call is atomic on its own.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._values: dict[str, str] = {}
        self._sets: dict[str, set[str]] = {}

    def get(self, key: str) -> str | None:
        with self._guard:
            return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        with self._guard:
            self._values[key] = str(value)

    def add_to_set(self, set_key: str, member: str) -> None:
        with self._guard:
            self._sets.setdefault(set_key, set()).add(str(member))

    def set_members(self, set_key: str) -> set[str]:
        with self._guard:
            return set(self._sets.get(set_key, ()))

    def ping(self) -> None:
        return None

    def close(self) -> None:
        return None
