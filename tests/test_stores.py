from __future__ import annotations

from unittest import mock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from persistence.memory_store import MemoryKeyValueStore
from persistence.redis_store import RedisKeyValueStore
from services.errors import StoreError


def test_memory_store_basic_ops():
    store = MemoryKeyValueStore()

    assert store.get("k") is None
    store.set("k", "v1")
    store.set("k", "v2")
    assert store.get("k") == "v2"

    assert store.set_members("s") == set()
    store.add_to_set("s", "1")
    store.add_to_set("s", "1")
    store.add_to_set("s", "2")
    assert store.set_members("s") == {"1", "2"}


def test_memory_store_members_are_a_copy():
    store = MemoryKeyValueStore()
    store.add_to_set("s", "1")

    members = store.set_members("s")
    members.add("2")

    assert store.set_members("s") == {"1"}


def _redis_store():
    client = mock.MagicMock()
    return RedisKeyValueStore(client), client


def test_redis_store_delegates_to_client():
    store, client = _redis_store()
    client.get.return_value = '{"id":1}'
    client.smembers.return_value = {"1", "2"}

    assert store.get("clientes:1") == '{"id":1}'
    store.set("clientes:1", '{"id":1}')
    store.add_to_set("clientes:index", "1")
    assert store.set_members("clientes:index") == {"1", "2"}

    client.get.assert_called_once_with("clientes:1")
    client.set.assert_called_once_with("clientes:1", '{"id":1}')
    client.sadd.assert_called_once_with("clientes:index", "1")
    client.smembers.assert_called_once_with("clientes:index")


def test_redis_store_absent_key_is_none():
    store, client = _redis_store()
    client.get.return_value = None

    assert store.get("clientes:404") is None


@pytest.mark.parametrize(
    "method,args,client_attr",
    [
        ("get", ("k",), "get"),
        ("set", ("k", "v"), "set"),
        ("add_to_set", ("s", "m"), "sadd"),
        ("set_members", ("s",), "smembers"),
        ("ping", (), "ping"),
    ],
)
def test_redis_store_translates_errors(method, args, client_attr):
    store, client = _redis_store()
    getattr(client, client_attr).side_effect = RedisConnectionError("Connection refused")

    with pytest.raises(StoreError) as exc:
        getattr(store, method)(*args)
    assert isinstance(exc.value.__cause__, RedisConnectionError)
    assert "Connection refused" in exc.value.message


def test_redis_store_timeout_is_a_store_error():
    store, client = _redis_store()
    client.get.side_effect = RedisTimeoutError("Timeout reading from socket")

    with pytest.raises(StoreError):
        store.get("k")


def test_redis_store_from_url_configures_client():
    with mock.patch("persistence.redis_store.redis.Redis.from_url") as from_url:
        RedisKeyValueStore.from_url("redis://cache:6380/2", socket_timeout=1.5)

    from_url.assert_called_once_with(
        "redis://cache:6380/2",
        decode_responses=True,
        socket_timeout=1.5,
        socket_connect_timeout=1.5,
    )
