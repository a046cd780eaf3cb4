from __future__ import annotations

from typing import Any, Sequence


class AppError(Exception):
    """Base class for faults surfaced to HTTP clients."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    status_code = 400

    def __init__(self, missing_fields: Sequence[str]):
        self.missing_fields = list(missing_fields)
        super().__init__("Faltan campos obligatorios: " + ", ".join(self.missing_fields))


class NotFoundError(AppError):
    status_code = 404

    def __init__(self, collection: str, record_id: Any, label: str | None = None):
        self.collection = collection
        self.record_id = record_id
        super().__init__(f"{label or collection} con ID {record_id} no encontrado")


class StoreError(AppError):
    """The key-value backend is unreachable or an operation failed."""


class MalformedRecordError(AppError):
    """A record cannot be serialized, or a stored value cannot be parsed."""


class ImportSourceError(AppError):
    """The bulk-import document is missing, unreadable or not parseable."""
