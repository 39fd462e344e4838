"""Application repository: the application lookup used by the upload pipeline."""

from __future__ import annotations

import logging

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from sikap.application.dtos.application import (
    REQUIRED_DOCUMENTS_ADAPTER,
    ApplicationRequirements,
)
from sikap.domain.exceptions import CorruptRecordException
from sikap.infrastructure.persistence.models.application import Application

logger = logging.getLogger(__name__)


class ApplicationRepository:
    """Read-only access to applications and their cooperation type's document list."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_with_required_documents(
        self, application_id: str
    ) -> ApplicationRequirements | None:
        """Return the application with validated required documents, or None.

        Raises:
            CorruptRecordException: The cooperation type's JSON column is malformed.
        """
        result = await self.db.execute(
            select(Application)
            .options(joinedload(Application.cooperation_type))
            .where(Application.id == application_id)
        )
        row = result.scalar_one_or_none()
        if row is None:
            return None
        try:
            required = REQUIRED_DOCUMENTS_ADAPTER.validate_python(
                row.cooperation_type.required_documents or []
            )
        except ValidationError as e:
            logger.error(
                "Malformed required_documents on cooperation type %s: %s",
                row.cooperation_type_id,
                e,
            )
            raise CorruptRecordException(
                "cooperation_type", row.cooperation_type_id
            ) from e
        return ApplicationRequirements(
            id=row.id,
            tracking_number=row.tracking_number,
            is_public_submission=row.is_public_submission,
            public_token=row.public_token,
            user_id=row.user_id,
            required_documents=required,
        )
