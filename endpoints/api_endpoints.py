from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from persistence.repositories import AsyncRecordStore
from services.bulk_loader import BulkLoader
from services.errors import NotFoundError, ValidationError
from services.resources import RESOURCES, ResourceHandler, ResourceSpec
from settings import Settings

router = APIRouter(tags=["records"])
logger = logging.getLogger(__name__)


def get_repository(request: Request) -> AsyncRecordStore:
    return request.app.state.repository


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def _failure(status_code: int, error: str, detalle: Any = None) -> JSONResponse:
    content: dict[str, Any] = {"success": False, "error": error}
    if detalle is not None:
        content["detalle"] = detalle
    return JSONResponse(status_code=status_code, content=content)


async def _read_payload(request: Request) -> Any:
    # Non-JSON bodies fall through to validation, which reports every field missing.
    try:
        return await request.json()
    except ValueError:
        return None


# -------------------------------------------------------------------
# Bulk load
# -------------------------------------------------------------------
@router.post("/seed")
async def seed(
    repo: AsyncRecordStore = Depends(get_repository),
    settings: Settings = Depends(get_app_settings),
):
    try:
        summary = await BulkLoader(repo).load_file(settings.seed_file)
    except Exception as e:
        logger.exception("SEED failed")
        return _failure(500, "Error al cargar los datos", str(e))

    return JSONResponse(
        {
            "success": True,
            "message": "Datos cargados exitosamente",
            "totalRegistros": summary.total_inserted,
            "detalle": summary.per_collection,
            "tiempoMs": summary.elapsed_ms,
            "tiempoSegundos": summary.elapsed_seconds,
        }
    )


# -------------------------------------------------------------------
# Per-resource CRUD, generated from the RESOURCES table
# -------------------------------------------------------------------
def _add_create_route(spec: ResourceSpec) -> None:
    async def create(request: Request, repo: AsyncRecordStore = Depends(get_repository)):
        payload = await _read_payload(request)
        try:
            data = await ResourceHandler(spec, repo).create(payload)
        except ValidationError as e:
            return _failure(400, e.message, e.missing_fields)
        except Exception as e:
            logger.exception("CREATE %s failed", spec.collection)
            return _failure(500, f"Error al guardar {spec.label}", str(e))
        return JSONResponse(
            {"success": True, "message": f"{spec.singular} guardado exitosamente", "data": data}
        )

    router.add_api_route(
        f"/{spec.collection}",
        create,
        methods=["POST"],
        name=f"create_{spec.collection}",
    )


def _add_list_route(spec: ResourceSpec) -> None:
    async def list_all(repo: AsyncRecordStore = Depends(get_repository)):
        try:
            records, total = await ResourceHandler(spec, repo).list_all()
        except Exception as e:
            logger.exception("LIST %s failed", spec.collection)
            return _failure(500, f"Error al listar {spec.plural_label}", str(e))
        return JSONResponse({"success": True, "total": total, "data": records})

    router.add_api_route(
        f"/{spec.collection}",
        list_all,
        methods=["GET"],
        name=f"list_{spec.collection}",
    )


def _add_get_route(spec: ResourceSpec) -> None:
    async def get_by_id(record_id: str, repo: AsyncRecordStore = Depends(get_repository)):
        try:
            record = await ResourceHandler(spec, repo).get_by_id(record_id)
        except NotFoundError as e:
            return _failure(404, e.message)
        except Exception as e:
            logger.exception("GET %s/%s failed", spec.collection, record_id)
            return _failure(500, f"Error al obtener {spec.label}", str(e))
        return JSONResponse({"success": True, "data": record})

    router.add_api_route(
        f"/{spec.collection}/{{record_id}}",
        get_by_id,
        methods=["GET"],
        name=f"get_{spec.collection}",
    )


# Collection-level routes go before the /{record_id} routes.
for _spec in RESOURCES:
    _add_create_route(_spec)
for _spec in RESOURCES:
    _add_list_route(_spec)
for _spec in RESOURCES:
    _add_get_route(_spec)
