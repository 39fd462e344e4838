"""Best-effort activity log service: writes to the activity_log table.

A failed audit write is logged and swallowed; it never aborts the upload
or download that triggered it.
"""

from __future__ import annotations

import logging

from sikap.application.dtos.activity_log import ActivityLogEntryCreate
from sikap.application.interfaces.repositories import IActivityLogRepository

logger = logging.getLogger(__name__)


class ActivityLogService:
    """Records activity entries via the repository; implements IActivityLogService."""

    def __init__(self, repo: IActivityLogRepository) -> None:
        self._repo = repo

    async def record(self, entry: ActivityLogEntryCreate) -> None:
        """Append one entry; log and continue on failure."""
        try:
            await self._repo.create(entry)
        except Exception:
            logger.warning(
                "Failed to record %s activity for %s %s",
                entry.action.value,
                entry.entity_type,
                entry.entity_id,
                exc_info=True,
            )
