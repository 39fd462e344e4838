"""DTOs for the application lookup collaborator."""

from dataclasses import dataclass, field

from pydantic import TypeAdapter


@dataclass(frozen=True)
class RequiredDocument:
    """One entry of a cooperation type's required-document list."""

    key: str
    name: str = ""
    required: bool = True


# Validates the JSON column at the repository boundary.
REQUIRED_DOCUMENTS_ADAPTER = TypeAdapter(list[RequiredDocument])


@dataclass(frozen=True)
class ApplicationRequirements:
    """Application read-model with the documents its cooperation type requires."""

    id: str
    tracking_number: str
    is_public_submission: bool
    public_token: str | None
    user_id: str | None
    required_documents: list[RequiredDocument] = field(default_factory=list)

    def requires(self, document_type: str) -> bool:
        """True if document_type is a key of the required-document list."""
        return any(doc.key == document_type for doc in self.required_documents)
