"""User repository. Read-only lookups used for upload attribution."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sikap.application.dtos.user import UserResult
from sikap.infrastructure.persistence.models.user import User


def _user_to_result(u: User) -> UserResult:
    """Map ORM User to application UserResult."""
    return UserResult(
        id=u.id,
        username=u.username,
        email=u.email,
        is_active=u.is_active,
    )


class UserRepository:
    """User repository; returns UserResult DTOs."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_by_username(self, username: str) -> UserResult | None:
        result = await self.db.execute(select(User).where(User.username == username))
        row = result.scalar_one_or_none()
        return _user_to_result(row) if row else None
