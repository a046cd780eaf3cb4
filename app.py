from __future__ import annotations

import contextlib
import logging
import time

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from dotenv import load_dotenv

from persistence import AsyncRecordRepository, KeyValueStore, MemoryKeyValueStore, RedisKeyValueStore
from services.resources import RESOURCES
from settings import Settings, get_settings

logger = logging.getLogger(__name__)

API_TITLE = "API TecnoMega - Redis + FastAPI"
API_VERSION = "1.0.0"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def build_store(settings: Settings) -> KeyValueStore:
    if settings.store_backend == "memory":
        logger.warning("STORE: using in-memory backend, data is lost on restart")
        return MemoryKeyValueStore()
    if settings.store_backend != "redis":
        raise ValueError(f"unsupported STORE_BACKEND: {settings.store_backend!r}")
    return RedisKeyValueStore.from_url(settings.redis_url, socket_timeout=settings.store_socket_timeout)


def _attach_store(app: FastAPI, store: KeyValueStore) -> None:
    app.state.store = store
    app.state.repository = AsyncRecordRepository(store)


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    owns_store = app.state.store is None
    if owns_store:
        store = build_store(app.state.settings)
        try:
            store.ping()
        except Exception:
            # No degraded mode: an unreachable store at startup stops the process.
            logger.exception("STORE: connection failed at startup")
            raise
        logger.info("STORE: connected (%s)", app.state.settings.store_backend)
        _attach_store(app, store)
    try:
        yield
    finally:
        if owns_store and app.state.store is not None:
            app.state.store.close()


def _endpoint_map(prefix: str) -> dict[str, str]:
    endpoints = {"seed": f"POST {prefix}/seed - Carga masiva desde JSON"}
    for spec in RESOURCES:
        endpoints[f"save_{spec.collection}"] = f"POST {prefix}/{spec.collection} - Guardar {spec.label}"
    for spec in RESOURCES:
        endpoints[f"get_{spec.collection}"] = f"GET {prefix}/{spec.collection}/:id - Obtener {spec.label}"
    for spec in RESOURCES:
        endpoints[f"list_{spec.collection}"] = f"GET {prefix}/{spec.collection} - Listar {spec.plural_label}"
    return endpoints


def create_app(store: KeyValueStore | None = None, settings: Settings | None = None) -> FastAPI:
    load_dotenv("local.env")
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    from endpoints.api_endpoints import router as api_router

    app = FastAPI(title=API_TITLE, version=API_VERSION, lifespan=lifespan)
    app.state.settings = settings
    app.state.store = None
    app.state.repository = None
    if store is not None:
        _attach_store(app, store)

    if settings.log_requests:

        @app.middleware("http")
        async def log_response_time(request: Request, call_next):
            started = time.perf_counter()
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - started) * 1000
            response.headers["X-Response-Time"] = f"{elapsed_ms:.2f}ms"
            logger.info("%s %s - %.2fms", request.method, request.url.path, elapsed_ms)
            return response

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return JSONResponse(status_code=404, content={"success": False, "error": "Ruta no encontrada"})
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content={"success": False, "error": "Error interno del servidor"})

    @app.get("/")
    async def index():
        return JSONResponse(
            {
                "message": API_TITLE,
                "version": API_VERSION,
                "endpoints": _endpoint_map(settings.api_prefix),
            }
        )

    app.include_router(api_router, prefix=settings.api_prefix)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run("app:app", host=_settings.host, port=_settings.port, log_level=_settings.log_level.lower())
