"""Persistence repositories. Re-exports for dependency injection."""

from sikap.infrastructure.persistence.repositories.activity_log_repo import (
    ActivityLogRepository,
)
from sikap.infrastructure.persistence.repositories.application_repo import (
    ApplicationRepository,
)
from sikap.infrastructure.persistence.repositories.document_repo import (
    DocumentRepository,
)
from sikap.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = [
    "ActivityLogRepository",
    "ApplicationRepository",
    "DocumentRepository",
    "UserRepository",
]
