from __future__ import annotations

import dataclasses
import json
from pathlib import Path
import sys


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
# This avoids ModuleNotFoundError for imports like `import persistence...` under pytest import modes
# that don't automatically prepend the cwd/rootdir to sys.path.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


class FlakyStore:
    """
    Wraps a store and fails the Nth call to set() with StoreError.
    """

    def __init__(self, inner, fail_on_set: int):
        self.inner = inner
        self.fail_on_set = fail_on_set
        self.set_calls = 0

    def get(self, key):
        return self.inner.get(key)

    def set(self, key, value):
        from services.errors import StoreError

        self.set_calls += 1
        if self.set_calls == self.fail_on_set:
            raise StoreError(f"simulated failure writing {key}")
        self.inner.set(key, value)

    def add_to_set(self, set_key, member):
        self.inner.add_to_set(set_key, member)

    def set_members(self, set_key):
        return self.inner.set_members(set_key)

    def ping(self):
        return None

    def close(self):
        return None


@pytest.fixture
def memory_store():
    from persistence.memory_store import MemoryKeyValueStore

    return MemoryKeyValueStore()


@pytest.fixture
def repository(memory_store):
    from persistence.records import RecordRepository

    return RecordRepository(memory_store)


@pytest.fixture
def async_repository(memory_store):
    from persistence.repositories import AsyncRecordRepository

    return AsyncRecordRepository(memory_store)


@pytest.fixture
def seed_file(tmp_path: Path) -> Path:
    doc = {
        "clientes": [{"id": 1, "cedula": "A", "nombres": "N", "email": "e@x.com"}],
        "productos": [],
    }
    path = tmp_path / "seed.json"
    path.write_text(json.dumps(doc), encoding="utf-8")
    return path


@pytest.fixture
def app_settings(seed_file: Path):
    from settings import get_settings

    return dataclasses.replace(get_settings(), seed_file=seed_file, api_prefix="/api", log_requests=True)


@pytest.fixture
def make_client(memory_store, app_settings):
    """
    Build a TestClient around create_app() with an injected store (no Redis needed).
    """
    from fastapi.testclient import TestClient

    import app as app_module

    def _make(store=None, settings=None, **kwargs):
        return TestClient(
            app_module.create_app(store=store or memory_store, settings=settings or app_settings),
            **kwargs,
        )

    return _make


@pytest.fixture
def client(make_client):
    return make_client()
