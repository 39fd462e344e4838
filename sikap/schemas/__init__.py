"""Pydantic request/response schemas for the API."""

from sikap.schemas.document import (
    DocumentListItem,
    DocumentListResponse,
    DocumentUploadResponse,
    DuplicateCheckResponse,
    FileUploadResponse,
    UploadedDocument,
)
from sikap.schemas.health import HealthResponse

__all__ = [
    "DocumentListItem",
    "DocumentListResponse",
    "DocumentUploadResponse",
    "DuplicateCheckResponse",
    "FileUploadResponse",
    "HealthResponse",
    "UploadedDocument",
]
