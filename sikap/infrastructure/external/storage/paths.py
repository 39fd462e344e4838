"""Category-scoped relative paths for stored uploads."""

from datetime import date

from sikap.domain.enums import UploadCategory

_CATEGORY_DIRS = {
    UploadCategory.APPLICATION: "uploads/document",
    UploadCategory.LEGAL_DOCUMENT: "uploads/legal",
    UploadCategory.SOP_DOCUMENT: "uploads/sop",
}


def allocate_relative_path(
    category: UploadCategory, stored_filename: str, today: date
) -> str:
    """Return the relative path for a stored file.

    application -> uploads/document/<name>
    legal-document -> uploads/legal/YYYY/MM/DD/<name>
    sop-document -> uploads/sop/YYYY/MM/DD/<name>
    """
    if "/" in stored_filename or "\\" in stored_filename or stored_filename in ("", ".", ".."):
        raise ValueError(f"Invalid stored filename: {stored_filename!r}")
    base = _CATEGORY_DIRS[category]
    if category is UploadCategory.APPLICATION:
        return f"{base}/{stored_filename}"
    return f"{base}/{today:%Y/%m/%d}/{stored_filename}"
