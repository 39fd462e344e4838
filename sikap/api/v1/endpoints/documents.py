"""Document API: thin routes delegating to DocumentUploadService and DocumentQueryService."""

import logging
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile
from fastapi.responses import StreamingResponse

from sikap.api.v1.dependencies import (
    get_document_query_service,
    get_document_upload_service,
)
from sikap.application.dtos.upload import UploadRequest
from sikap.application.use_cases.documents import (
    DocumentQueryService,
    DocumentUploadService,
)
from sikap.core.limiter import limit_reads, limit_upload
from sikap.domain.enums import UploadCategory
from sikap.domain.exceptions import (
    SikapException,
    UploadFailedException,
    ValidationException,
)
from sikap.schemas.document import (
    DocumentListItem,
    DocumentListResponse,
    DocumentUploadResponse,
    DuplicateCheckResponse,
    FileUploadResponse,
    UploadedDocument,
)
from sikap.shared.request_audit import get_request_provenance

logger = logging.getLogger(__name__)

router = APIRouter()

# Downloads must never be cached or rendered inline.
_DOWNLOAD_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Cache-Control": "private, no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


def _parse_category(value: str | None) -> UploadCategory | None:
    if not value:
        return None
    try:
        return UploadCategory(value)
    except ValueError:
        raise ValidationException(
            f"Invalid upload type. Must be one of: {', '.join(UploadCategory.values())}",
            field="type",
        ) from None


@router.post(
    "/upload",
    response_model=DocumentUploadResponse | FileUploadResponse,
)
@limit_upload
async def upload_document(
    request: Request,
    upload_type: str | None = Form(None, alias="type"),
    application_id: str | None = Form(None, alias="applicationId"),
    document_type: str | None = Form(None, alias="documentType"),
    file: UploadFile | None = File(None),
    upload_svc: DocumentUploadService = Depends(get_document_upload_service),
):
    """Upload a file through the validation and scanning pipeline.

    Application uploads create a document row; legal and SOP uploads only
    store the file and return its relative path.
    """
    provenance = get_request_provenance(request)
    try:
        raw_bytes = await file.read() if file is not None else None
        outcome = await upload_svc.upload(
            UploadRequest(
                raw_bytes=raw_bytes,
                original_filename=(file.filename or "") if file is not None else "",
                declared_mime_type=(file.content_type or "") if file is not None else "",
                upload_category=_parse_category(upload_type),
                application_id=application_id,
                document_type=document_type,
                ip_address=provenance.ip_address,
                user_agent=provenance.user_agent,
                request_id=provenance.request_id,
            )
        )
    except SikapException:
        raise
    except Exception as e:
        logger.exception("File upload error (request_id=%s)", provenance.request_id)
        raise UploadFailedException() from e
    finally:
        if file is not None:
            await file.close()

    if outcome.document is not None:
        return DocumentUploadResponse(
            document=UploadedDocument.from_result(outcome.document)
        )
    return FileUploadResponse.from_stored(outcome.stored_file)


@router.get("/upload", response_model=DocumentListResponse)
@limit_reads
async def list_documents(
    request: Request,
    application_id: str | None = Query(None, alias="applicationId"),
    query_svc: DocumentQueryService = Depends(get_document_query_service),
):
    """List documents for an application, newest first."""
    documents = await query_svc.list_documents(application_id)
    return DocumentListResponse(
        documents=[DocumentListItem.from_result(d) for d in documents]
    )


@router.get("/duplicates", response_model=DuplicateCheckResponse)
@limit_reads
async def check_duplicate(
    request: Request,
    application_id: str = Query(..., alias="applicationId"),
    document_type: str = Query(..., alias="documentType"),
    file_hash: str = Query(..., alias="fileHash", min_length=64, max_length=64),
    query_svc: DocumentQueryService = Depends(get_document_query_service),
):
    """Whether content with this sha-256 already fills the application's document slot."""
    existing = await query_svc.find_duplicate(application_id, document_type, file_hash)
    return DuplicateCheckResponse(
        duplicate=existing is not None,
        document_id=existing.id if existing else None,
    )


@router.get("/{document_id}/download")
@limit_reads
async def download_document(
    request: Request,
    document_id: str,
    token: str | None = Query(None),
    query_svc: DocumentQueryService = Depends(get_document_query_service),
):
    """Stream a stored document as an attachment.

    Public submissions require the application's public token.
    """
    provenance = get_request_provenance(request)
    result = await query_svc.download(
        document_id,
        token,
        ip_address=provenance.ip_address,
        user_agent=provenance.user_agent,
        request_id=provenance.request_id,
    )
    document = result.document
    headers = {
        **_DOWNLOAD_HEADERS,
        "Content-Length": str(document.file_size),
        "Content-Disposition": (
            f'attachment; filename="{quote(document.original_filename, safe="")}"'
        ),
    }
    return StreamingResponse(
        result.content,
        media_type=document.mime_type,
        headers=headers,
    )
