"""DB-backed repository and activity log dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from sikap.infrastructure.persistence.database import get_db_transactional
from sikap.infrastructure.persistence.repositories import (
    ActivityLogRepository,
    ApplicationRepository,
    DocumentRepository,
    UserRepository,
)
from sikap.infrastructure.services import ActivityLogService


async def get_activity_log_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> ActivityLogService:
    """Best-effort activity log on the request transaction (savepoint per entry)."""
    return ActivityLogService(ActivityLogRepository(db))


async def get_application_repo(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> ApplicationRepository:
    return ApplicationRepository(db)


async def get_user_repo(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> UserRepository:
    return UserRepository(db)


async def get_document_repo(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> DocumentRepository:
    """Document repository sharing the request transaction."""
    return DocumentRepository(db)

