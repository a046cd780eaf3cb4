from __future__ import annotations

from typing import Protocol


class KeyValueStore(Protocol):
    """
    Minimal key-value backend: string values under string keys, plus string sets.

    Implementations raise services.errors.StoreError for any backend failure.
    """

    def get(self, key: str) -> str | None:
        """Return the value under key, or None when the key does not exist."""
        ...

    def set(self, key: str, value: str) -> None:
        """Unconditionally write value under key (last writer wins)."""
        ...

    def add_to_set(self, set_key: str, member: str) -> None:
        """Add member to the set; adding an existing member is a no-op."""
        ...

    def set_members(self, set_key: str) -> set[str]:
        """Return every member of the set (empty when the set does not exist)."""
        ...

    def ping(self) -> None:
        ...

    def close(self) -> None:
        ...
