"""Application DTOs (no ORM dependency)."""

from sikap.application.dtos.activity_log import (
    ActivityLogEntryCreate,
    ActivityLogResult,
)
from sikap.application.dtos.application import (
    REQUIRED_DOCUMENTS_ADAPTER,
    ApplicationRequirements,
    RequiredDocument,
)
from sikap.application.dtos.document import (
    DocumentCreate,
    DocumentDownload,
    DocumentResult,
    UploadOutcome,
)
from sikap.application.dtos.upload import (
    ScanResult,
    StoredFile,
    UploadRequest,
    ValidationResult,
)
from sikap.application.dtos.user import UserResult

__all__ = [
    "REQUIRED_DOCUMENTS_ADAPTER",
    "ActivityLogEntryCreate",
    "ActivityLogResult",
    "ApplicationRequirements",
    "DocumentCreate",
    "DocumentDownload",
    "DocumentResult",
    "RequiredDocument",
    "ScanResult",
    "StoredFile",
    "UploadOutcome",
    "UploadRequest",
    "UserResult",
    "ValidationResult",
]
