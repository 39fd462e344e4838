"""DTOs for the activity (audit) log."""

from dataclasses import dataclass
from datetime import datetime

from sikap.domain.enums import ActivityAction


@dataclass(frozen=True)
class ActivityLogEntryCreate:
    """Input for one append-only activity entry."""

    user_id: str
    action: ActivityAction
    entity_type: str
    entity_id: str
    description: str
    ip_address: str = "unknown"
    user_agent: str = "unknown"
    request_id: str | None = None


@dataclass(frozen=True)
class ActivityLogResult:
    """Activity entry read-model."""

    id: str
    user_id: str
    action: str
    entity_type: str
    entity_id: str
    description: str
    ip_address: str
    user_agent: str
    request_id: str | None
    timestamp: datetime
