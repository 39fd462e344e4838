"""Unit tests for the best-effort activity log service."""

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from sikap.application.dtos.activity_log import ActivityLogEntryCreate
from sikap.domain.enums import ActivityAction
from sikap.infrastructure.services import ActivityLogService

ENTRY = ActivityLogEntryCreate(
    user_id="u-1",
    action=ActivityAction.UPLOAD,
    entity_type="document",
    entity_id="doc-1",
    description="Document uploaded: a.pdf for application app-1",
)


async def test_record_delegates_to_repo() -> None:
    repo = MagicMock()
    repo.create = AsyncMock()
    await ActivityLogService(repo).record(ENTRY)
    repo.create.assert_awaited_once_with(ENTRY)


async def test_record_swallows_and_logs_failures(caplog: pytest.LogCaptureFixture) -> None:
    repo = MagicMock()
    repo.create = AsyncMock(side_effect=RuntimeError("insert failed"))
    with caplog.at_level(logging.WARNING):
        await ActivityLogService(repo).record(ENTRY)
    assert "Failed to record UPLOAD activity for document doc-1" in caplog.text
