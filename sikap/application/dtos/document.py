"""DTOs for document use cases (no dependency on ORM)."""

from collections.abc import AsyncIterator
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from sikap.application.dtos.upload import StoredFile


@dataclass(frozen=True)
class DocumentCreate:
    """Input for creating a document record (write-model). Use case builds this; repo persists and returns DocumentResult."""

    application_id: str
    document_type: str
    original_filename: str
    stored_filename: str
    relative_path: str
    file_size: int
    mime_type: str
    file_hash: str
    uploaded_by: str
    virus_scan_result: dict[str, Any] | None = None


@dataclass(frozen=True)
class DocumentResult:
    """Document read-model (result of get_by_id, find_duplicate, list_by_application, create)."""

    id: str
    application_id: str
    document_type: str
    original_filename: str
    stored_filename: str
    relative_path: str
    file_size: int
    mime_type: str
    file_hash: str
    uploaded_by: str | None
    uploaded_at: datetime
    virus_scan_result: dict[str, Any] | None = None


@dataclass(frozen=True)
class UploadOutcome:
    """Result of a successful upload.

    document is set for application uploads; stored_file for legal/SOP uploads.
    """

    document: DocumentResult | None = None
    stored_file: StoredFile | None = None


@dataclass(frozen=True)
class DocumentDownload:
    """A document together with the async byte stream of its stored file."""

    document: DocumentResult
    content: AsyncIterator[bytes]
