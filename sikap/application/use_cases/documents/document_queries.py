"""Document query use cases: list, duplicate check, and download with access control."""

from __future__ import annotations

import hmac

from sikap.application.dtos.activity_log import ActivityLogEntryCreate
from sikap.application.dtos.document import DocumentDownload, DocumentResult
from sikap.application.interfaces.repositories import (
    IApplicationRepository,
    IDocumentRepository,
    IUserRepository,
)
from sikap.application.interfaces.services import IActivityLogService
from sikap.application.interfaces.storage import IStorageService
from sikap.domain.enums import ActivityAction
from sikap.domain.exceptions import (
    AccessDeniedException,
    ResourceNotFoundException,
    ValidationException,
)
from sikap.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class DocumentQueryService:
    """Read side of documents: list per application, duplicate lookup, download."""

    def __init__(
        self,
        document_repo: IDocumentRepository,
        application_repo: IApplicationRepository,
        user_repo: IUserRepository,
        storage: IStorageService,
        activity_log: IActivityLogService,
        *,
        system_username: str = "system",
    ) -> None:
        self.document_repo = document_repo
        self.application_repo = application_repo
        self.user_repo = user_repo
        self.storage = storage
        self.activity_log = activity_log
        self.system_username = system_username

    async def list_documents(self, application_id: str | None) -> list[DocumentResult]:
        """Documents for an application, newest first."""
        if not application_id:
            raise ValidationException("Application ID is required", field="applicationId")
        return await self.document_repo.list_by_application(application_id)

    async def find_duplicate(
        self, application_id: str, document_type: str, file_hash: str
    ) -> DocumentResult | None:
        """Existing document with the same content in the same slot, if any."""
        return await self.document_repo.find_duplicate(
            application_id, document_type, file_hash.lower()
        )

    async def download(
        self,
        document_id: str,
        token: str | None,
        *,
        ip_address: str = "unknown",
        user_agent: str = "unknown",
        request_id: str | None = None,
    ) -> DocumentDownload:
        """Return the document and its byte stream.

        Public submissions require the application's public token.

        Raises:
            ResourceNotFoundException: No such document, or its file is missing.
            AccessDeniedException: Token missing or wrong for a public submission.
        """
        document = await self.document_repo.get_by_id(document_id)
        if document is None:
            raise ResourceNotFoundException("document", document_id)

        application = await self.application_repo.get_with_required_documents(
            document.application_id
        )
        if application is None:
            raise ResourceNotFoundException("application", document.application_id)

        if application.is_public_submission:
            expected = application.public_token or ""
            if not token or not expected or not hmac.compare_digest(token, expected):
                logger.warning("Download of document %s denied: bad token", document_id)
                raise AccessDeniedException()

        if not await self.storage.exists(document.relative_path):
            logger.error(
                "Document %s row exists but file %s is missing",
                document_id,
                document.relative_path,
            )
            raise ResourceNotFoundException(
                "document", document_id, message="File not found on server"
            )

        actor_id = application.user_id
        if actor_id is None:
            system_user = await self.user_repo.get_by_username(self.system_username)
            actor_id = system_user.id if system_user else None
        if actor_id is not None:
            await self.activity_log.record(
                ActivityLogEntryCreate(
                    user_id=actor_id,
                    action=ActivityAction.DOWNLOAD,
                    entity_type="document",
                    entity_id=document.id,
                    description=f"Document downloaded: {document.original_filename}",
                    ip_address=ip_address,
                    user_agent=user_agent,
                    request_id=request_id,
                )
            )

        return DocumentDownload(
            document=document,
            content=self.storage.download(document.relative_path),
        )
