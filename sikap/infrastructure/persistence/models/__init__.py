"""Persistence models: ORM entities and mixins."""

from sikap.infrastructure.persistence.models.activity_log import ActivityLog
from sikap.infrastructure.persistence.models.application import (
    Application,
    CooperationType,
)
from sikap.infrastructure.persistence.models.document import Document
from sikap.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin
from sikap.infrastructure.persistence.models.user import User

__all__ = [
    "ActivityLog",
    "Application",
    "CooperationType",
    "Document",
    "User",
    "CuidMixin",
    "TimestampMixin",
]
