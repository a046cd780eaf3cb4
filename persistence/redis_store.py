from __future__ import annotations

import logging

import redis
from redis.exceptions import RedisError

from services.errors import StoreError

from .interfaces import KeyValueStore

logger = logging.getLogger(__name__)


class RedisKeyValueStore(KeyValueStore):
    """
    KeyValueStore backed by a synchronous redis-py client.

    The client must be created with decode_responses=True so that values come
    back as str. Every RedisError is re-raised as StoreError.
    """

    def __init__(self, client: redis.Redis):
        self._client = client

    @classmethod
    def from_url(cls, url: str, *, socket_timeout: float = 5.0) -> "RedisKeyValueStore":
        client = redis.Redis.from_url(
            url,
            decode_responses=True,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout,
        )
        return cls(client)

    def get(self, key: str) -> str | None:
        try:
            return self._client.get(key)
        except RedisError as e:
            raise StoreError(f"GET {key} failed: {e}") from e

    def set(self, key: str, value: str) -> None:
        try:
            self._client.set(key, value)
        except RedisError as e:
            raise StoreError(f"SET {key} failed: {e}") from e

    def add_to_set(self, set_key: str, member: str) -> None:
        try:
            self._client.sadd(set_key, member)
        except RedisError as e:
            raise StoreError(f"SADD {set_key} failed: {e}") from e

    def set_members(self, set_key: str) -> set[str]:
        try:
            return set(self._client.smembers(set_key))
        except RedisError as e:
            raise StoreError(f"SMEMBERS {set_key} failed: {e}") from e

    def ping(self) -> None:
        try:
            self._client.ping()
        except RedisError as e:
            raise StoreError(f"store is unreachable: {e}") from e

    def close(self) -> None:
        try:
            self._client.close()
        except RedisError:
            logger.warning("STORE CLOSE: failed to close redis client", exc_info=True)
