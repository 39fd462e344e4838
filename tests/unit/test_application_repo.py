"""Unit tests for ApplicationRepository with a mocked AsyncSession."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from sikap.domain.exceptions import CorruptRecordException
from sikap.infrastructure.persistence.repositories import ApplicationRepository


def _session(row) -> MagicMock:
    result = MagicMock()
    result.scalar_one_or_none.return_value = row
    db = MagicMock()
    db.execute = AsyncMock(return_value=result)
    return db


def _row(required_documents) -> SimpleNamespace:
    return SimpleNamespace(
        id="app-1",
        tracking_number="SIKAP-1",
        is_public_submission=False,
        public_token=None,
        user_id="user-1",
        cooperation_type_id="ct-1",
        cooperation_type=SimpleNamespace(required_documents=required_documents),
    )


async def test_required_documents_are_parsed() -> None:
    repo = ApplicationRepository(
        _session(_row([{"key": "proposal", "name": "Proposal", "required": True}]))
    )
    found = await repo.get_with_required_documents("app-1")
    assert found is not None
    assert found.requires("proposal")


async def test_missing_application_is_none() -> None:
    repo = ApplicationRepository(_session(None))
    assert await repo.get_with_required_documents("missing") is None


@pytest.mark.parametrize(
    "required_documents",
    [[{"name": "no key"}], "not-a-list", [{"key": ["proposal"]}]],
)
async def test_malformed_column_is_a_server_error(required_documents) -> None:
    repo = ApplicationRepository(_session(_row(required_documents)))
    with pytest.raises(CorruptRecordException) as exc_info:
        await repo.get_with_required_documents("app-1")
    assert exc_info.value.resource_type == "cooperation_type"
    assert exc_info.value.resource_id == "ct-1"
