"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from sikap.domain.enums import ActivityAction, UploadCategory
from sikap.domain.exceptions import (
    AccessDeniedException,
    CorruptRecordException,
    DuplicateDocumentException,
    FileRejectedException,
    MaliciousContentException,
    ResourceNotFoundException,
    ScanUnavailableException,
    SikapException,
    SqlNotConfiguredException,
    SystemUserNotFoundException,
    UploadFailedException,
    ValidationException,
)

__all__ = [
    # Enums
    "ActivityAction",
    "UploadCategory",
    # Exceptions
    "AccessDeniedException",
    "CorruptRecordException",
    "DuplicateDocumentException",
    "FileRejectedException",
    "MaliciousContentException",
    "ResourceNotFoundException",
    "ScanUnavailableException",
    "SikapException",
    "SqlNotConfiguredException",
    "SystemUserNotFoundException",
    "UploadFailedException",
    "ValidationException",
]
