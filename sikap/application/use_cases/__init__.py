"""Application use cases: one entry point per workflow."""

from sikap.application.use_cases.documents import (
    DocumentQueryService,
    DocumentUploadService,
)

__all__ = ["DocumentQueryService", "DocumentUploadService"]
