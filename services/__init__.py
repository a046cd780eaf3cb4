from __future__ import annotations

from .errors import (
    AppError,
    ImportSourceError,
    MalformedRecordError,
    NotFoundError,
    StoreError,
    ValidationError,
)

__all__ = [
    "AppError",
    "ImportSourceError",
    "MalformedRecordError",
    "NotFoundError",
    "StoreError",
    "ValidationError",
]
