"""Unit tests for category-scoped relative path allocation."""

from datetime import date

import pytest

from sikap.domain.enums import UploadCategory
from sikap.infrastructure.external.storage import allocate_relative_path

TODAY = date(2025, 3, 7)


def test_application_documents_are_flat() -> None:
    path = allocate_relative_path(UploadCategory.APPLICATION, "1_abc_a.pdf", TODAY)
    assert path == "uploads/document/1_abc_a.pdf"


def test_legal_documents_are_dated() -> None:
    path = allocate_relative_path(UploadCategory.LEGAL_DOCUMENT, "1_abc_a.pdf", TODAY)
    assert path == "uploads/legal/2025/03/07/1_abc_a.pdf"


def test_sop_documents_are_dated() -> None:
    path = allocate_relative_path(UploadCategory.SOP_DOCUMENT, "x.png", TODAY)
    assert path == "uploads/sop/2025/03/07/x.png"


@pytest.mark.parametrize("name", ["", ".", "..", "a/b.pdf", "..\\a.pdf"])
def test_rejects_unsafe_names(name: str) -> None:
    with pytest.raises(ValueError, match="Invalid stored filename"):
        allocate_relative_path(UploadCategory.APPLICATION, name, TODAY)
