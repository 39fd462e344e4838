"""Document use cases: upload pipeline and queries."""

from sikap.application.use_cases.documents.document_queries import DocumentQueryService
from sikap.application.use_cases.documents.upload_document import (
    DocumentUploadService,
)

__all__ = ["DocumentQueryService", "DocumentUploadService"]
