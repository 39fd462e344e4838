"""Document dependencies (composition root).

Storage and scanner are separate dependencies so tests can override them.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from sikap.application.interfaces.services import IContentScanner
from sikap.application.interfaces.storage import IStorageService
from sikap.application.use_cases.documents import (
    DocumentQueryService,
    DocumentUploadService,
)
from sikap.core.config import get_settings
from sikap.infrastructure.external.scanning import create_content_scanner
from sikap.infrastructure.external.storage import (
    StorageFactory,
    allocate_relative_path,
)
from sikap.infrastructure.persistence.repositories import (
    ApplicationRepository,
    DocumentRepository,
    UserRepository,
)
from sikap.infrastructure.services import ActivityLogService

from . import db as db_deps


def get_storage_service() -> IStorageService:
    """Storage backend selected by STORAGE_BACKEND."""
    return StorageFactory.create_storage_service()


@lru_cache
def _content_scanner() -> IContentScanner:
    return create_content_scanner(get_settings())


def get_content_scanner() -> IContentScanner:
    """Process-wide scanner selected by SCANNER_BACKEND."""
    return _content_scanner()


async def get_document_upload_service(
    storage: Annotated[IStorageService, Depends(get_storage_service)],
    scanner: Annotated[IContentScanner, Depends(get_content_scanner)],
    application_repo: Annotated[
        ApplicationRepository, Depends(db_deps.get_application_repo)
    ],
    document_repo: Annotated[
        DocumentRepository, Depends(db_deps.get_document_repo)
    ],
    user_repo: Annotated[UserRepository, Depends(db_deps.get_user_repo)],
    activity_log: Annotated[
        ActivityLogService, Depends(db_deps.get_activity_log_service)
    ],
) -> DocumentUploadService:
    """Build DocumentUploadService (all repositories share one transaction)."""
    settings = get_settings()
    return DocumentUploadService(
        storage=storage,
        scanner=scanner,
        application_repo=application_repo,
        document_repo=document_repo,
        user_repo=user_repo,
        activity_log=activity_log,
        allocate_path=allocate_relative_path,
        system_username=settings.system_username,
        max_file_size=settings.max_file_size,
        scan_timeout_seconds=settings.scan_timeout_seconds,
    )


async def get_document_query_service(
    storage: Annotated[IStorageService, Depends(get_storage_service)],
    application_repo: Annotated[
        ApplicationRepository, Depends(db_deps.get_application_repo)
    ],
    document_repo: Annotated[
        DocumentRepository, Depends(db_deps.get_document_repo)
    ],
    user_repo: Annotated[UserRepository, Depends(db_deps.get_user_repo)],
    activity_log: Annotated[
        ActivityLogService, Depends(db_deps.get_activity_log_service)
    ],
) -> DocumentQueryService:
    """Build DocumentQueryService for listing, duplicate lookup and download."""
    return DocumentQueryService(
        document_repo=document_repo,
        application_repo=application_repo,
        user_repo=user_repo,
        storage=storage,
        activity_log=activity_log,
        system_username=get_settings().system_username,
    )
