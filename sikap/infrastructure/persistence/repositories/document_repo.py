"""Document repository. Returns application DTOs."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from sikap.application.dtos.document import DocumentCreate, DocumentResult
from sikap.domain.exceptions import DuplicateDocumentException
from sikap.infrastructure.persistence.models.document import (
    DOCUMENT_SLOT_HASH_CONSTRAINT,
    Document,
)
from sikap.shared.utils.datetime import ensure_utc


def _create_to_document(d: DocumentCreate) -> Document:
    """Map DocumentCreate (write-model) to ORM Document for persistence."""
    return Document(
        application_id=d.application_id,
        document_type=d.document_type,
        original_filename=d.original_filename,
        stored_filename=d.stored_filename,
        relative_path=d.relative_path,
        file_size=d.file_size,
        mime_type=d.mime_type,
        file_hash=d.file_hash,
        virus_scan_result=d.virus_scan_result,
        uploaded_by=d.uploaded_by,
    )


def _document_to_result(d: Document) -> DocumentResult:
    """Map ORM Document to application DocumentResult."""
    return DocumentResult(
        id=d.id,
        application_id=d.application_id,
        document_type=d.document_type,
        original_filename=d.original_filename,
        stored_filename=d.stored_filename,
        relative_path=d.relative_path,
        file_size=d.file_size,
        mime_type=d.mime_type,
        file_hash=d.file_hash,
        uploaded_by=d.uploaded_by,
        uploaded_at=ensure_utc(d.uploaded_at) or d.uploaded_at,
        virus_scan_result=d.virus_scan_result,
    )


class DocumentRepository:
    """Document repository. create_document() accepts DocumentCreate; returns DocumentResult."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def find_duplicate(
        self, application_id: str, document_type: str, file_hash: str
    ) -> DocumentResult | None:
        result = await self.db.execute(
            select(Document).where(
                Document.application_id == application_id,
                Document.document_type == document_type,
                Document.file_hash == file_hash,
            )
        )
        row = result.scalars().first()
        return _document_to_result(row) if row else None

    async def create_document(self, data: DocumentCreate) -> DocumentResult:
        """Insert inside a savepoint; the slot/hash unique constraint maps to DuplicateDocumentException."""
        row = _create_to_document(data)
        try:
            async with self.db.begin_nested():
                self.db.add(row)
                await self.db.flush()
        except IntegrityError as e:
            if DOCUMENT_SLOT_HASH_CONSTRAINT in str(e.orig):
                raise DuplicateDocumentException(
                    data.application_id, data.document_type
                ) from None
            raise
        await self.db.refresh(row)
        return _document_to_result(row)

    async def list_by_application(self, application_id: str) -> list[DocumentResult]:
        """Return documents for the application, newest first."""
        result = await self.db.execute(
            select(Document)
            .where(Document.application_id == application_id)
            .order_by(Document.uploaded_at.desc())
        )
        return [_document_to_result(r) for r in result.scalars().all()]

    async def get_by_id(self, document_id: str) -> DocumentResult | None:
        result = await self.db.execute(
            select(Document).where(Document.id == document_id)
        )
        row = result.scalar_one_or_none()
        return _document_to_result(row) if row else None
