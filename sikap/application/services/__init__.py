"""Application services: file validation, secure naming, content hashing."""

from sikap.application.services.file_hash import compute_file_hash
from sikap.application.services.file_validator import (
    ALLOWED_EXTENSIONS,
    ALLOWED_MIME_TYPES,
    MAX_FILE_SIZE,
    detect_mime_type,
    validate_file,
)
from sikap.application.services.secure_filename import (
    generate_secure_name,
    sanitize_filename,
)

__all__ = [
    "ALLOWED_EXTENSIONS",
    "ALLOWED_MIME_TYPES",
    "MAX_FILE_SIZE",
    "compute_file_hash",
    "detect_mime_type",
    "generate_secure_name",
    "sanitize_filename",
    "validate_file",
]
