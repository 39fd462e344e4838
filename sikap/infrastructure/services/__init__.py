"""Infrastructure services."""

from sikap.infrastructure.services.activity_log_service import ActivityLogService

__all__ = ["ActivityLogService"]
