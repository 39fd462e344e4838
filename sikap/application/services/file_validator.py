"""Declared-vs-actual type validation for uploaded files.

Gates run in order and the first failure wins: size, extension, declared
MIME type, magic-number detection, declared/detected consistency, then a
structural check for the detected format. The detected MIME type comes
from the byte signature only; extension and declared type are used for
cross-checking.
"""

import logging

from sikap.application.dtos.upload import ValidationResult
from sikap.application.services.secure_filename import generate_secure_name
from sikap.shared.telemetry.tracing import traced

logger = logging.getLogger(__name__)

MIB = 1024 * 1024
MAX_FILE_SIZE = 5 * MIB

PDF = "application/pdf"
MSWORD = "application/msword"
DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
JPEG = "image/jpeg"
JPG = "image/jpg"
PNG = "image/png"

ALLOWED_MIME_TYPES = frozenset({PDF, MSWORD, DOCX, JPEG, PNG, JPG})
ALLOWED_EXTENSIONS = frozenset({".pdf", ".doc", ".docx", ".jpg", ".jpeg", ".png"})

# Checked in order; first match wins.
FILE_SIGNATURES: tuple[tuple[str, bytes], ...] = (
    (PDF, b"%PDF"),
    (MSWORD, b"\xd0\xcf\x11\xe0"),
    (DOCX, b"PK\x03\x04"),
    (JPEG, b"\xff\xd8\xff"),
    (PNG, b"\x89PNG"),
)

_JPEG_FAMILY = frozenset({JPEG, JPG})
_PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
_ZIP_LOCAL_HEADER = b"PK\x03\x04"


def extract_extension(original_filename: str) -> str:
    """Lower-cased substring from the last '.' (inclusive); '' when there is no dot."""
    dot = original_filename.rfind(".")
    if dot == -1:
        return ""
    return original_filename[dot:].lower()


def detect_mime_type(data: bytes) -> str | None:
    """Return the MIME type whose magic-number prefix matches data, else None."""
    for mime_type, signature in FILE_SIGNATURES:
        if data.startswith(signature):
            return mime_type
    return None


def is_mime_type_consistent(declared: str, detected: str, extension: str) -> bool:
    """Declared and detected types agree: exact, both JPEG-family, or .docx with a ZIP signature."""
    if declared == detected:
        return True
    if declared in _JPEG_FAMILY and detected in _JPEG_FAMILY:
        return True
    return extension == ".docx" and detected == DOCX


def _check_pdf(data: bytes) -> str | None:
    if not data[:8].startswith(b"%PDF-"):
        return "Invalid PDF file structure"
    if b"%%EOF" not in data:
        return "PDF file appears to be corrupted or incomplete"
    return None


def _check_docx(data: bytes) -> str | None:
    if not data.startswith(_ZIP_LOCAL_HEADER):
        return "Invalid DOCX file structure"
    return None


def _check_jpeg(data: bytes) -> str | None:
    if data[:2] != b"\xff\xd8":
        return "Invalid JPEG file structure"
    if data[-2:] != b"\xff\xd9":
        return "JPEG file appears to be corrupted or incomplete"
    return None


def _check_png(data: bytes) -> str | None:
    if not data.startswith(_PNG_SIGNATURE):
        return "Invalid PNG file structure"
    return None


_STRUCTURE_CHECKS = {
    PDF: _check_pdf,
    DOCX: _check_docx,
    JPEG: _check_jpeg,
    JPG: _check_jpeg,
    PNG: _check_png,
}


def check_structure(data: bytes, detected_mime_type: str) -> str | None:
    """Format-specific sanity check; returns an error message or None. Unlisted types pass."""
    check = _STRUCTURE_CHECKS.get(detected_mime_type)
    return check(data) if check else None


@traced("validate_file")
def validate_file(
    data: bytes,
    original_filename: str,
    declared_mime_type: str,
    max_file_size: int = MAX_FILE_SIZE,
) -> ValidationResult:
    """Run all gates over an upload and return the first failure or the accepted result.

    Args:
        data: Raw uploaded bytes.
        original_filename: Client-supplied name (cross-check only).
        declared_mime_type: Client-supplied Content-Type (cross-check only).
        max_file_size: Size limit in bytes (inclusive).

    Returns:
        ValidationResult with error on rejection, or with the stored name and
        detected MIME type on success.
    """
    try:
        if len(data) > max_file_size:
            return ValidationResult.rejected(
                f"File size exceeds {max_file_size // MIB}MB limit"
            )

        extension = extract_extension(original_filename)
        if extension not in ALLOWED_EXTENSIONS:
            return ValidationResult.rejected(
                f"File extension {extension} is not allowed"
            )

        if declared_mime_type not in ALLOWED_MIME_TYPES:
            return ValidationResult.rejected(
                f"MIME type {declared_mime_type} is not allowed"
            )

        detected = detect_mime_type(data)
        if detected is None:
            return ValidationResult.rejected("Could not detect valid file signature")

        if not is_mime_type_consistent(declared_mime_type, detected, extension):
            logger.warning(
                "Signature mismatch: declared=%s detected=%s extension=%s",
                declared_mime_type,
                detected,
                extension,
            )
            return ValidationResult.rejected(
                "File signature does not match declared type"
            )

        structure_error = check_structure(data, detected)
        if structure_error:
            return ValidationResult.rejected(structure_error)

        return ValidationResult.accepted(
            sanitized_filename=generate_secure_name(original_filename),
            detected_mime_type=detected,
        )
    except Exception:
        logger.exception("File validation raised unexpectedly")
        return ValidationResult.rejected(
            "File validation failed due to processing error"
        )
