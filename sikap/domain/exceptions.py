"""Domain exceptions for the SIKAP document service.

Defines domain-level exceptions for rejected uploads and missing
collaborators. These exceptions are independent of infrastructure concerns.
Presentation layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class SikapException(Exception):
    """Base exception for all SIKAP application errors.

    Attributes:
        message: Human-readable error description (returned to the client).
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Response envelope: human message under 'error', code and details alongside."""
        return {
            "error": self.message,
            "error_code": self.error_code,
            "details": self.details,
        }


class ValidationException(SikapException):
    """Raised when request input is missing or malformed (client error)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class FileRejectedException(SikapException):
    """Raised when an uploaded file fails a size, type, signature or structure gate."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "FILE_REJECTED")


class MaliciousContentException(SikapException):
    """Raised when the content scan flags the file.

    The message never names the matched signature.
    """

    def __init__(self) -> None:
        super().__init__(
            "File contains malicious content and cannot be uploaded",
            "MALICIOUS_CONTENT",
        )


class ScanUnavailableException(SikapException):
    """Raised when the content scanner times out or fails."""

    def __init__(self, reason: str = "timeout") -> None:
        super().__init__(
            "Virus scan unavailable, please try again later",
            "SCAN_UNAVAILABLE",
            {"reason": reason},
        )


class ResourceNotFoundException(SikapException):
    """Raised when a requested resource is not found."""

    def __init__(
        self, resource_type: str, resource_id: str, message: str | None = None
    ) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'application', 'document').
            resource_id: The ID that was not found.
            message: Optional client-facing message; defaults to '<Type> not found'.
        """
        super().__init__(
            message or f"{resource_type.capitalize()} not found",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class AccessDeniedException(SikapException):
    """Raised when a public download token does not match the application."""

    def __init__(self, message: str = "Invalid access token") -> None:
        super().__init__(message, "ACCESS_DENIED")


class DuplicateDocumentException(SikapException):
    """Raised when identical content was already uploaded for the same document slot."""

    def __init__(self, application_id: str, document_type: str) -> None:
        super().__init__(
            "This file has already been uploaded for this document type",
            "DUPLICATE_DOCUMENT",
            {"application_id": application_id, "document_type": document_type},
        )


class SystemUserNotFoundException(SikapException):
    """Raised when the system identity used for public submissions is missing."""

    def __init__(self, username: str) -> None:
        super().__init__(
            "System user not found. Please run database seed.",
            "SYSTEM_USER_NOT_FOUND",
            {"username": username},
        )


class UploadFailedException(SikapException):
    """Raised for unexpected failures while processing an upload (details stay in logs)."""

    def __init__(self) -> None:
        super().__init__(
            "File upload failed due to server error",
            "UPLOAD_FAILED",
        )


class CorruptRecordException(SikapException):
    """Raised when a stored record cannot be interpreted (server-side data problem).

    The client sees a generic message; the record identity goes to the logs.
    """

    def __init__(self, resource_type: str, resource_id: str) -> None:
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(
            "Request failed due to server error",
            "CORRUPT_RECORD",
        )


class SqlNotConfiguredException(SikapException):
    """Raised when an operation requires Postgres but the backend is not configured."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
