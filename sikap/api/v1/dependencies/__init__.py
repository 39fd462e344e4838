"""Composition root: FastAPI dependencies that build services and repositories."""

from sikap.api.v1.dependencies.db import (
    get_activity_log_service,
    get_application_repo,
    get_document_repo,
    get_user_repo,
)
from sikap.api.v1.dependencies.document import (
    get_content_scanner,
    get_document_query_service,
    get_document_upload_service,
    get_storage_service,
)

__all__ = [
    "get_activity_log_service",
    "get_application_repo",
    "get_content_scanner",
    "get_document_query_service",
    "get_document_repo",
    "get_document_upload_service",
    "get_storage_service",
    "get_user_repo",
]
