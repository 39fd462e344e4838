"""DTOs for the upload pipeline (no dependency on ORM or HTTP)."""

from dataclasses import dataclass
from datetime import datetime

from sikap.domain.enums import UploadCategory


@dataclass(frozen=True)
class UploadRequest:
    """One untrusted upload as received from the transport.

    Every field except upload_category is client-controlled; original_filename
    is display-only and never used to build a path.
    """

    raw_bytes: bytes | None
    original_filename: str
    declared_mime_type: str
    upload_category: UploadCategory | None
    application_id: str | None = None
    document_type: str | None = None
    ip_address: str = "unknown"
    user_agent: str = "unknown"
    request_id: str | None = None


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of the declared-vs-actual type validator.

    error is set iff not is_valid; sanitized_filename and detected_mime_type
    are set iff is_valid.
    """

    is_valid: bool
    error: str | None = None
    sanitized_filename: str | None = None
    detected_mime_type: str | None = None

    @classmethod
    def rejected(cls, error: str) -> "ValidationResult":
        return cls(is_valid=False, error=error)

    @classmethod
    def accepted(
        cls, sanitized_filename: str, detected_mime_type: str
    ) -> "ValidationResult":
        return cls(
            is_valid=True,
            sanitized_filename=sanitized_filename,
            detected_mime_type=detected_mime_type,
        )


@dataclass(frozen=True)
class ScanResult:
    """Outcome of a content scan; threat is set iff not is_clean."""

    is_clean: bool
    scan_time: datetime
    threat: str | None = None

    def to_summary(self) -> dict[str, str | bool | None]:
        """Serialized form stored with the document row."""
        return {
            "isClean": self.is_clean,
            "scanTime": self.scan_time.isoformat(),
            "threat": self.threat,
        }


@dataclass(frozen=True)
class StoredFile:
    """Facts about bytes written for a non-application upload."""

    relative_path: str
    original_filename: str
    file_size: int
    mime_type: str
    file_hash: str
