"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from sikap.application.dtos.activity_log import (
        ActivityLogEntryCreate,
        ActivityLogResult,
    )
    from sikap.application.dtos.application import ApplicationRequirements
    from sikap.application.dtos.document import DocumentCreate, DocumentResult
    from sikap.application.dtos.user import UserResult


class IApplicationRepository(Protocol):
    """Protocol for the application lookup collaborator."""

    async def get_with_required_documents(
        self, application_id: str
    ) -> ApplicationRequirements | None:
        """Return the application and its cooperation type's required documents."""


class IDocumentRepository(Protocol):
    """Protocol for document metadata persistence."""

    async def find_duplicate(
        self, application_id: str, document_type: str, file_hash: str
    ) -> DocumentResult | None:
        """Return an existing document with the same slot and content hash."""

    async def create_document(self, data: DocumentCreate) -> DocumentResult:
        """Persist a document row. Raises DuplicateDocumentException on the slot/hash constraint."""

    async def list_by_application(self, application_id: str) -> list[DocumentResult]:
        """Return documents for an application (newest first)."""

    async def get_by_id(self, document_id: str) -> DocumentResult | None:
        """Return document by ID."""


class IUserRepository(Protocol):
    """Protocol for user lookups."""

    async def get_by_username(self, username: str) -> UserResult | None:
        """Return user by username."""


class IActivityLogRepository(Protocol):
    """Protocol for the append-only activity log."""

    async def create(self, entry: ActivityLogEntryCreate) -> ActivityLogResult:
        """Append one activity entry."""
