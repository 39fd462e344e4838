"""Document API schemas.

Field names are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from sikap.application.dtos.document import DocumentResult
from sikap.application.dtos.upload import StoredFile

UPLOAD_SUCCESS_MESSAGE = "File uploaded successfully"


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class UploadedDocument(_CamelModel):
    """Document created by an application upload."""

    id: str
    original_filename: str
    file_size: int
    mime_type: str
    document_type: str
    file_hash: str
    uploaded_at: datetime

    @classmethod
    def from_result(cls, document: DocumentResult) -> "UploadedDocument":
        return cls(
            id=document.id,
            original_filename=document.original_filename,
            file_size=document.file_size,
            mime_type=document.mime_type,
            document_type=document.document_type,
            file_hash=document.file_hash,
            uploaded_at=document.uploaded_at,
        )


class DocumentUploadResponse(_CamelModel):
    """Response for POST /upload with type=application."""

    success: bool = True
    document: UploadedDocument
    message: str = UPLOAD_SUCCESS_MESSAGE


class FileUploadResponse(_CamelModel):
    """Response for POST /upload with type=legal-document or sop-document.

    The caller persists its own record referencing relative_path.
    """

    success: bool = True
    relative_path: str
    original_filename: str
    file_size: int
    mime_type: str
    message: str = UPLOAD_SUCCESS_MESSAGE

    @classmethod
    def from_stored(cls, stored: StoredFile) -> "FileUploadResponse":
        return cls(
            relative_path=stored.relative_path,
            original_filename=stored.original_filename,
            file_size=stored.file_size,
            mime_type=stored.mime_type,
        )


class DocumentListItem(_CamelModel):
    """Document list item (GET /upload?applicationId=)."""

    id: str
    original_filename: str
    file_size: int
    mime_type: str
    document_type: str
    uploaded_at: datetime

    @classmethod
    def from_result(cls, document: DocumentResult) -> "DocumentListItem":
        return cls(
            id=document.id,
            original_filename=document.original_filename,
            file_size=document.file_size,
            mime_type=document.mime_type,
            document_type=document.document_type,
            uploaded_at=document.uploaded_at,
        )


class DocumentListResponse(BaseModel):
    """Response for GET /upload?applicationId=."""

    documents: list[DocumentListItem]


class DuplicateCheckResponse(_CamelModel):
    """Response for GET /duplicates."""

    duplicate: bool
    document_id: str | None = Field(default=None, description="Existing document id")
