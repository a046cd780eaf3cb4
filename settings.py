from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def default_seed_file() -> Path:
    # settings.py lives at the project root
    return Path(__file__).resolve().parent / "data" / "tecnomega.json"


@dataclass(frozen=True)
class Settings:
    # Store
    redis_url: str
    store_backend: str
    store_socket_timeout: float

    # HTTP
    api_prefix: str
    host: str
    port: int

    # Seed import source
    seed_file: Path

    # Logging
    log_level: str
    log_requests: bool


def get_settings() -> Settings:
    redis_url = os.getenv("REDIS_URL", "redis://localhost:6379")
    store_backend = os.getenv("STORE_BACKEND", "redis").strip().lower()
    store_socket_timeout = _env_float("STORE_SOCKET_TIMEOUT", 5.0)

    api_prefix = "/" + os.getenv("API_PREFIX", "/api").strip().strip("/")
    if api_prefix == "/":
        api_prefix = ""

    seed_raw = os.getenv("SEED_FILE", "").strip()
    seed_file = Path(seed_raw) if seed_raw else default_seed_file()

    return Settings(
        redis_url=redis_url,
        store_backend=store_backend,
        store_socket_timeout=store_socket_timeout,
        api_prefix=api_prefix,
        host=os.getenv("HOST", "0.0.0.0"),
        port=_env_int("PORT", 3000),
        seed_file=seed_file,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        log_requests=_env_bool("LOG_REQUESTS", True),
    )
