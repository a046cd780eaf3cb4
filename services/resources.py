from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from persistence.repositories import AsyncRecordStore
from services.errors import NotFoundError, ValidationError


@dataclass(frozen=True)
class ResourceSpec:
    collection: str
    required_fields: tuple[str, ...]
    # "Cliente" -> "Cliente guardado exitosamente", "Cliente con ID 1 no encontrado"
    singular: str
    # "el cliente" -> "Error al guardar el cliente"
    label: str
    # "los clientes" -> "Error al listar los clientes"
    plural_label: str
    # name used in "<name> con ID 1 no encontrado" when it differs from singular
    lookup_name: str = ""

    @property
    def not_found_name(self) -> str:
        return self.lookup_name or self.singular


CLIENTES = ResourceSpec(
    collection="clientes",
    required_fields=("id", "cedula", "nombres", "email"),
    singular="Cliente",
    label="el cliente",
    plural_label="los clientes",
)
PRODUCTOS = ResourceSpec(
    collection="productos",
    required_fields=("id", "codigo", "nombre", "categoria"),
    singular="Producto",
    label="el producto",
    plural_label="los productos",
)
PEDIDOS = ResourceSpec(
    collection="pedidos",
    required_fields=("id", "codigo", "clienteId"),
    singular="Pedido",
    label="el pedido",
    plural_label="los pedidos",
)
DETALLE_PEDIDO = ResourceSpec(
    collection="detalle_pedido",
    required_fields=("id", "codigo", "productoId"),
    singular="Detalle de pedido",
    label="el detalle",
    plural_label="los detalles",
    lookup_name="Detalle",
)

RESOURCES: tuple[ResourceSpec, ...] = (CLIENTES, PRODUCTOS, PEDIDOS, DETALLE_PEDIDO)


def missing_fields(spec: ResourceSpec, payload: Any) -> list[str]:
    """
    Required fields that are absent or empty on payload.

    Falsy values (None, "", 0, False, empty containers) count as missing.
    """
    if not isinstance(payload, Mapping):
        return list(spec.required_fields)
    return [name for name in spec.required_fields if not payload.get(name)]


class ResourceHandler:
    """CRUD surface of one collection: validate, then delegate to the repository."""

    def __init__(self, spec: ResourceSpec, repository: AsyncRecordStore) -> None:
        self.spec = spec
        self._repo = repository

    async def create(self, payload: Mapping[str, Any]) -> Mapping[str, Any]:
        missing = missing_fields(self.spec, payload)
        if missing:
            raise ValidationError(missing)
        await self._repo.save(self.spec.collection, payload["id"], payload)
        return payload

    async def get_by_id(self, record_id: Any) -> Any:
        record = await self._repo.get(self.spec.collection, record_id)
        if record is None:
            raise NotFoundError(self.spec.collection, record_id, label=self.spec.not_found_name)
        return record

    async def list_all(self) -> tuple[list[Any], int]:
        records = await self._repo.list_all(self.spec.collection)
        return records, len(records)
