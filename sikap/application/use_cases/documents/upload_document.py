"""Document upload use case: the secure ingestion pipeline.

Stages run in a fixed order and the first failure stops the request:
presence checks, application lookup and document-type membership,
size pre-check, declared-vs-actual validation, content scan (with timeout),
hashing, duplicate check, path allocation, write, metadata row, activity
entry. Nothing touches disk before the write step; after it, a metadata
failure leaves the written file in place and is logged with its path.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import date, datetime

from sikap.application.dtos.activity_log import ActivityLogEntryCreate
from sikap.application.dtos.application import ApplicationRequirements
from sikap.application.dtos.document import DocumentCreate, UploadOutcome
from sikap.application.dtos.upload import ScanResult, StoredFile, UploadRequest
from sikap.application.dtos.user import UserResult
from sikap.application.interfaces.repositories import (
    IApplicationRepository,
    IDocumentRepository,
    IUserRepository,
)
from sikap.application.interfaces.services import IActivityLogService, IContentScanner
from sikap.application.interfaces.storage import IStorageService
from sikap.application.services.file_hash import compute_file_hash
from sikap.application.services.file_validator import MAX_FILE_SIZE, MIB, validate_file
from sikap.domain.enums import ActivityAction, UploadCategory
from sikap.domain.exceptions import (
    DuplicateDocumentException,
    FileRejectedException,
    MaliciousContentException,
    ResourceNotFoundException,
    ScanUnavailableException,
    SystemUserNotFoundException,
    UploadFailedException,
    ValidationException,
)
from sikap.shared.telemetry.logging import get_logger
from sikap.shared.telemetry.tracing import add_span_attributes, traced
from sikap.shared.utils.datetime import utc_now

logger = get_logger(__name__)


class DocumentUploadService:
    """Runs one upload through validation, screening, storage and metadata persistence."""

    def __init__(
        self,
        storage: IStorageService,
        scanner: IContentScanner,
        application_repo: IApplicationRepository,
        document_repo: IDocumentRepository,
        user_repo: IUserRepository,
        activity_log: IActivityLogService,
        allocate_path: Callable[[UploadCategory, str, date], str],
        *,
        system_username: str = "system",
        max_file_size: int = MAX_FILE_SIZE,
        scan_timeout_seconds: float = 30.0,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.storage = storage
        self.scanner = scanner
        self.application_repo = application_repo
        self.document_repo = document_repo
        self.user_repo = user_repo
        self.activity_log = activity_log
        self.allocate_path = allocate_path
        self.system_username = system_username
        self.max_file_size = max_file_size
        self.scan_timeout_seconds = scan_timeout_seconds
        self.clock = clock

    @traced("upload_document")
    async def upload(self, request: UploadRequest) -> UploadOutcome:
        """Process one upload.

        Returns:
            UploadOutcome with document (application) or stored_file (legal/SOP).

        Raises:
            ValidationException: Missing fields or unknown document type (400).
            ResourceNotFoundException: Application does not exist (404).
            FileRejectedException: Size, type, signature or structure gate failed (400).
            MaliciousContentException: Scan flagged the content (400).
            ScanUnavailableException: Scan timed out or failed (503).
            DuplicateDocumentException: Same content already fills this slot (409).
            SystemUserNotFoundException: System identity missing (500).
            CorruptRecordException: The application's document list is unreadable (500).
            UploadFailedException: The write or the metadata insert failed (500).
        """
        category = self._check_presence(request)
        data = request.raw_bytes or b""
        add_span_attributes(category=category.value, size=len(data))

        if category is UploadCategory.APPLICATION:
            application = await self._load_application(request.application_id or "")
            self._check_document_type(application, request.document_type or "")

        if len(data) > self.max_file_size:
            self._reject(f"File size exceeds {self.max_file_size // MIB}MB limit")

        validation = validate_file(
            data,
            request.original_filename,
            request.declared_mime_type,
            max_file_size=self.max_file_size,
        )
        if not validation.is_valid:
            self._reject(validation.error or "File validation failed")
        stored_filename = validation.sanitized_filename or ""
        mime_type = validation.detected_mime_type or ""

        scan_result = await self._scan(data)
        if not scan_result.is_clean:
            logger.warning(
                "Upload rejected: malicious content (filename=%r, size=%d)",
                request.original_filename,
                len(data),
            )
            raise MaliciousContentException()

        file_hash = compute_file_hash(data)

        system_user: UserResult | None = None
        if category is UploadCategory.APPLICATION:
            await self._check_duplicate(
                request.application_id or "", request.document_type or "", file_hash
            )
            system_user = await self._get_system_user()

        relative_path = self.allocate_path(
            category, stored_filename, self.clock().date()
        )
        try:
            await self.storage.upload(data, relative_path, file_hash, mime_type)
        except Exception as e:
            logger.exception("Write to %s failed", relative_path)
            raise UploadFailedException() from e

        # Only application uploads resolve a system user; legal/SOP callers persist their own record.
        if system_user is None:
            logger.info(
                "Stored %s upload at %s (%d bytes, %s)",
                category.value,
                relative_path,
                len(data),
                mime_type,
            )
            return UploadOutcome(
                stored_file=StoredFile(
                    relative_path=relative_path,
                    original_filename=request.original_filename,
                    file_size=len(data),
                    mime_type=mime_type,
                    file_hash=file_hash,
                )
            )

        document = await self._persist_document(
            request,
            DocumentCreate(
                application_id=request.application_id or "",
                document_type=request.document_type or "",
                original_filename=request.original_filename,
                stored_filename=stored_filename,
                relative_path=relative_path,
                file_size=len(data),
                mime_type=mime_type,
                file_hash=file_hash,
                uploaded_by=system_user.id,
                virus_scan_result=scan_result.to_summary(),
            ),
        )
        logger.info(
            "Document %s uploaded for application %s (type=%s, %d bytes, %s)",
            document.id,
            document.application_id,
            document.document_type,
            document.file_size,
            document.mime_type,
        )

        await self.activity_log.record(
            ActivityLogEntryCreate(
                user_id=system_user.id,
                action=ActivityAction.UPLOAD,
                entity_type="document",
                entity_id=document.id,
                description=(
                    f"Document uploaded: {request.original_filename} "
                    f"for application {document.application_id}"
                ),
                ip_address=request.ip_address,
                user_agent=request.user_agent,
                request_id=request.request_id,
            )
        )
        return UploadOutcome(document=document)

    @staticmethod
    def _check_presence(request: UploadRequest) -> UploadCategory:
        if request.raw_bytes is None:
            raise ValidationException("No file provided", field="file")
        if request.upload_category is None:
            raise ValidationException("Upload type is required", field="type")
        if request.upload_category is UploadCategory.APPLICATION:
            if not request.application_id:
                raise ValidationException(
                    "Application ID is required for application uploads",
                    field="applicationId",
                )
            if not request.document_type:
                raise ValidationException(
                    "Document type is required for application uploads",
                    field="documentType",
                )
        return request.upload_category

    async def _load_application(self, application_id: str) -> ApplicationRequirements:
        application = await self.application_repo.get_with_required_documents(
            application_id
        )
        if application is None:
            raise ResourceNotFoundException("application", application_id)
        return application

    @staticmethod
    def _check_document_type(
        application: ApplicationRequirements, document_type: str
    ) -> None:
        if not application.requires(document_type):
            raise ValidationException(
                "Invalid document type for this application", field="documentType"
            )

    @staticmethod
    def _reject(reason: str) -> None:
        logger.warning("Upload rejected: %s", reason)
        raise FileRejectedException(reason)

    async def _scan(self, data: bytes) -> ScanResult:
        try:
            return await asyncio.wait_for(
                self.scanner.scan(data), timeout=self.scan_timeout_seconds
            )
        except TimeoutError:
            logger.warning(
                "Content scan timed out after %.1fs", self.scan_timeout_seconds
            )
            raise ScanUnavailableException("timeout") from None
        except Exception as e:
            logger.exception("Content scan failed")
            raise ScanUnavailableException("error") from e

    async def _check_duplicate(
        self, application_id: str, document_type: str, file_hash: str
    ) -> None:
        existing = await self.document_repo.find_duplicate(
            application_id, document_type, file_hash
        )
        if existing is not None:
            logger.info(
                "Duplicate upload for application %s slot %s (existing document %s)",
                application_id,
                document_type,
                existing.id,
            )
            raise DuplicateDocumentException(application_id, document_type)

    async def _get_system_user(self) -> UserResult:
        user = await self.user_repo.get_by_username(self.system_username)
        if user is None:
            logger.error("System user %r not found; run the seed script", self.system_username)
            raise SystemUserNotFoundException(self.system_username)
        return user

    async def _persist_document(self, request: UploadRequest, data: DocumentCreate):
        try:
            return await self.document_repo.create_document(data)
        except DuplicateDocumentException:
            # Lost a race with a concurrent identical upload; our copy is redundant.
            logger.info(
                "Concurrent duplicate for application %s slot %s; removing %s",
                data.application_id,
                data.document_type,
                data.relative_path,
            )
            try:
                await self.storage.delete(data.relative_path)
            except Exception:
                logger.warning(
                    "Could not remove redundant file %s", data.relative_path, exc_info=True
                )
            raise
        except Exception as e:
            logger.exception(
                "Document metadata persistence failed; orphaned file at %s (request_id=%s)",
                data.relative_path,
                request.request_id,
            )
            raise UploadFailedException() from e
