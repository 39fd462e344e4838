"""Unit tests for DocumentUploadService (pipeline order, branching, failure handling)."""

import asyncio
import hashlib
from datetime import UTC, date, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from sikap.application.dtos.application import ApplicationRequirements, RequiredDocument
from sikap.application.dtos.document import DocumentCreate, DocumentResult
from sikap.application.dtos.upload import ScanResult, UploadRequest
from sikap.application.dtos.user import UserResult
from sikap.application.use_cases.documents import DocumentUploadService
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
from sikap.infrastructure.external.storage import allocate_relative_path

PDF_BYTES = b"%PDF-1.4\n1 0 obj\n<< >>\nendobj\n%%EOF\n"
PDF_HASH = hashlib.sha256(PDF_BYTES).hexdigest()
NOW = datetime(2025, 3, 7, 10, 30, tzinfo=UTC)
SYSTEM_USER = UserResult(id="u-system", username="system", email=None, is_active=True)
APPLICATION = ApplicationRequirements(
    id="app-1",
    tracking_number="SIKAP-1",
    is_public_submission=True,
    public_token="tok",
    user_id=None,
    required_documents=[RequiredDocument(key="proposal"), RequiredDocument(key="profile")],
)


def _document_from(data: DocumentCreate) -> DocumentResult:
    return DocumentResult(
        id="doc-1",
        application_id=data.application_id,
        document_type=data.document_type,
        original_filename=data.original_filename,
        stored_filename=data.stored_filename,
        relative_path=data.relative_path,
        file_size=data.file_size,
        mime_type=data.mime_type,
        file_hash=data.file_hash,
        uploaded_by=data.uploaded_by,
        uploaded_at=NOW,
        virus_scan_result=data.virus_scan_result,
    )


def _request(**overrides) -> UploadRequest:
    fields = {
        "raw_bytes": PDF_BYTES,
        "original_filename": "proposal.pdf",
        "declared_mime_type": "application/pdf",
        "upload_category": UploadCategory.APPLICATION,
        "application_id": "app-1",
        "document_type": "proposal",
        "ip_address": "203.0.113.9",
        "user_agent": "pytest",
        "request_id": "req-1",
    }
    fields.update(overrides)
    return UploadRequest(**fields)


@pytest.fixture
def deps() -> dict:
    storage = MagicMock()
    storage.upload = AsyncMock(return_value={})
    storage.delete = AsyncMock(return_value=True)
    scanner = MagicMock()
    scanner.scan = AsyncMock(return_value=ScanResult(is_clean=True, scan_time=NOW))
    application_repo = MagicMock()
    application_repo.get_with_required_documents = AsyncMock(return_value=APPLICATION)
    document_repo = MagicMock()
    document_repo.find_duplicate = AsyncMock(return_value=None)
    document_repo.create_document = AsyncMock(side_effect=_document_from)
    user_repo = MagicMock()
    user_repo.get_by_username = AsyncMock(return_value=SYSTEM_USER)
    activity_log = MagicMock()
    activity_log.record = AsyncMock(return_value=None)
    return {
        "storage": storage,
        "scanner": scanner,
        "application_repo": application_repo,
        "document_repo": document_repo,
        "user_repo": user_repo,
        "activity_log": activity_log,
    }


@pytest.fixture
def service(deps: dict) -> DocumentUploadService:
    return DocumentUploadService(
        **deps,
        allocate_path=allocate_relative_path,
        scan_timeout_seconds=0.5,
        clock=lambda: NOW,
    )


async def test_application_upload_creates_document(
    service: DocumentUploadService, deps: dict
) -> None:
    outcome = await service.upload(_request())

    assert outcome.stored_file is None
    document = outcome.document
    assert document is not None
    assert document.file_hash == PDF_HASH
    assert document.mime_type == "application/pdf"
    assert document.uploaded_by == SYSTEM_USER.id
    assert document.relative_path.startswith("uploads/document/")
    assert document.relative_path.endswith("_proposal.pdf")
    assert document.virus_scan_result == {
        "isClean": True,
        "scanTime": NOW.isoformat(),
        "threat": None,
    }
    deps["storage"].upload.assert_awaited_once_with(
        PDF_BYTES, document.relative_path, PDF_HASH, "application/pdf"
    )


async def test_application_upload_records_activity(
    service: DocumentUploadService, deps: dict
) -> None:
    await service.upload(_request())

    entry = deps["activity_log"].record.await_args.args[0]
    assert entry.action is ActivityAction.UPLOAD
    assert entry.entity_type == "document"
    assert entry.entity_id == "doc-1"
    assert entry.user_id == SYSTEM_USER.id
    assert entry.ip_address == "203.0.113.9"
    assert entry.user_agent == "pytest"
    assert entry.request_id == "req-1"


async def test_legal_upload_returns_stored_file_without_db_row(
    service: DocumentUploadService, deps: dict
) -> None:
    outcome = await service.upload(
        _request(
            upload_category=UploadCategory.LEGAL_DOCUMENT,
            application_id=None,
            document_type=None,
        )
    )

    assert outcome.document is None
    stored = outcome.stored_file
    assert stored is not None
    assert stored.relative_path.startswith("uploads/legal/2025/03/07/")
    assert stored.original_filename == "proposal.pdf"
    assert stored.file_size == len(PDF_BYTES)
    assert stored.file_hash == PDF_HASH
    deps["application_repo"].get_with_required_documents.assert_not_awaited()
    deps["document_repo"].create_document.assert_not_awaited()
    deps["user_repo"].get_by_username.assert_not_awaited()
    deps["activity_log"].record.assert_not_awaited()


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"raw_bytes": None}, "No file provided"),
        ({"upload_category": None}, "Upload type is required"),
        ({"application_id": None}, "Application ID is required for application uploads"),
        ({"document_type": ""}, "Document type is required for application uploads"),
    ],
)
async def test_presence_checks(
    service: DocumentUploadService, deps: dict, overrides: dict, message: str
) -> None:
    with pytest.raises(ValidationException) as exc_info:
        await service.upload(_request(**overrides))
    assert exc_info.value.message == message
    deps["storage"].upload.assert_not_awaited()


async def test_unknown_application_is_not_found(
    service: DocumentUploadService, deps: dict
) -> None:
    deps["application_repo"].get_with_required_documents.return_value = None
    with pytest.raises(ResourceNotFoundException) as exc_info:
        await service.upload(_request())
    assert exc_info.value.message == "Application not found"


async def test_document_type_must_be_required_key(service: DocumentUploadService) -> None:
    with pytest.raises(ValidationException, match="Invalid document type for this application"):
        await service.upload(_request(document_type="passport"))


async def test_oversize_rejected_before_validation(
    deps: dict,
) -> None:
    service = DocumentUploadService(
        **deps, allocate_path=allocate_relative_path, max_file_size=10
    )
    with pytest.raises(FileRejectedException):
        await service.upload(_request())
    deps["scanner"].scan.assert_not_awaited()


async def test_validation_failure_stops_before_scan(
    service: DocumentUploadService, deps: dict
) -> None:
    with pytest.raises(FileRejectedException) as exc_info:
        await service.upload(_request(original_filename="a.exe"))
    assert exc_info.value.message == "File extension .exe is not allowed"
    deps["scanner"].scan.assert_not_awaited()
    deps["storage"].upload.assert_not_awaited()


async def test_malicious_content_rejected_without_write(
    service: DocumentUploadService, deps: dict
) -> None:
    deps["scanner"].scan.return_value = ScanResult(
        is_clean=False, scan_time=NOW, threat="Malicious content detected"
    )
    with pytest.raises(MaliciousContentException):
        await service.upload(_request())
    deps["storage"].upload.assert_not_awaited()


async def test_scan_timeout_is_unavailable(
    service: DocumentUploadService, deps: dict
) -> None:
    async def slow_scan(data: bytes) -> ScanResult:
        await asyncio.sleep(5)
        return ScanResult(is_clean=True, scan_time=NOW)

    deps["scanner"].scan = slow_scan
    with pytest.raises(ScanUnavailableException) as exc_info:
        await service.upload(_request())
    assert exc_info.value.details == {"reason": "timeout"}
    deps["storage"].upload.assert_not_awaited()


async def test_scanner_error_is_unavailable(
    service: DocumentUploadService, deps: dict
) -> None:
    deps["scanner"].scan.side_effect = ConnectionError("daemon down")
    with pytest.raises(ScanUnavailableException) as exc_info:
        await service.upload(_request())
    assert exc_info.value.details == {"reason": "error"}


async def test_duplicate_in_same_slot_is_conflict(
    service: DocumentUploadService, deps: dict
) -> None:
    deps["document_repo"].find_duplicate.return_value = _document_from(
        DocumentCreate(
            application_id="app-1",
            document_type="proposal",
            original_filename="proposal.pdf",
            stored_filename="x.pdf",
            relative_path="uploads/document/x.pdf",
            file_size=len(PDF_BYTES),
            mime_type="application/pdf",
            file_hash=PDF_HASH,
            uploaded_by=SYSTEM_USER.id,
        )
    )
    with pytest.raises(DuplicateDocumentException):
        await service.upload(_request())
    deps["document_repo"].find_duplicate.assert_awaited_once_with(
        "app-1", "proposal", PDF_HASH
    )
    deps["storage"].upload.assert_not_awaited()


async def test_same_bytes_under_other_document_type_is_allowed(
    service: DocumentUploadService, deps: dict
) -> None:
    await service.upload(_request(document_type="proposal"))
    outcome = await service.upload(_request(document_type="profile"))
    assert outcome.document is not None
    assert outcome.document.document_type == "profile"
    assert deps["storage"].upload.await_count == 2


async def test_missing_system_user_fails_before_write(
    service: DocumentUploadService, deps: dict
) -> None:
    deps["user_repo"].get_by_username.return_value = None
    with pytest.raises(SystemUserNotFoundException):
        await service.upload(_request())
    deps["storage"].upload.assert_not_awaited()


async def test_write_failure_is_upload_failed(
    service: DocumentUploadService, deps: dict
) -> None:
    deps["storage"].upload.side_effect = OSError("disk full")
    with pytest.raises(UploadFailedException):
        await service.upload(_request())
    deps["document_repo"].create_document.assert_not_awaited()


async def test_metadata_failure_after_write_is_upload_failed(
    service: DocumentUploadService, deps: dict
) -> None:
    deps["document_repo"].create_document.side_effect = RuntimeError("db gone")
    with pytest.raises(UploadFailedException):
        await service.upload(_request())
    deps["storage"].upload.assert_awaited_once()
    deps["storage"].delete.assert_not_awaited()


async def test_concurrent_duplicate_removes_redundant_file(
    service: DocumentUploadService, deps: dict
) -> None:
    deps["document_repo"].create_document.side_effect = DuplicateDocumentException(
        "app-1", "proposal"
    )
    with pytest.raises(DuplicateDocumentException):
        await service.upload(_request())
    written_path = deps["storage"].upload.await_args.args[1]
    deps["storage"].delete.assert_awaited_once_with(written_path)


async def test_clock_drives_dated_paths(deps: dict) -> None:
    captured: list[tuple[UploadCategory, str, date]] = []

    def allocate(category: UploadCategory, name: str, today: date) -> str:
        captured.append((category, name, today))
        return allocate_relative_path(category, name, today)

    service = DocumentUploadService(**deps, allocate_path=allocate, clock=lambda: NOW)
    await service.upload(
        _request(upload_category=UploadCategory.SOP_DOCUMENT, application_id=None)
    )
    assert captured[0][0] is UploadCategory.SOP_DOCUMENT
    assert captured[0][2] == date(2025, 3, 7)
