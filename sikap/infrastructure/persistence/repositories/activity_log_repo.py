"""Activity log repository. Append-only; implements IActivityLogRepository."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from sikap.application.dtos.activity_log import (
    ActivityLogEntryCreate,
    ActivityLogResult,
)
from sikap.infrastructure.persistence.models.activity_log import ActivityLog
from sikap.shared.utils.generators import generate_cuid


def _orm_to_result(row: ActivityLog) -> ActivityLogResult:
    """Map ORM to application DTO."""
    return ActivityLogResult(
        id=row.id,
        user_id=row.user_id,
        action=row.action,
        entity_type=row.entity_type,
        entity_id=row.entity_id,
        description=row.description,
        ip_address=row.ip_address,
        user_agent=row.user_agent,
        request_id=row.request_id,
        timestamp=row.timestamp,
    )


class ActivityLogRepository:
    """Append-only activity log repository. No update/delete."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create(self, entry: ActivityLogEntryCreate) -> ActivityLogResult:
        """Append one entry inside a savepoint so a failure leaves the outer transaction usable."""
        row = ActivityLog(
            id=generate_cuid(),
            user_id=entry.user_id,
            action=entry.action.value,
            entity_type=entry.entity_type,
            entity_id=entry.entity_id,
            description=entry.description,
            ip_address=entry.ip_address,
            user_agent=entry.user_agent,
            request_id=entry.request_id,
        )
        async with self.db.begin_nested():
            self.db.add(row)
            await self.db.flush()
        await self.db.refresh(row)
        return _orm_to_result(row)
