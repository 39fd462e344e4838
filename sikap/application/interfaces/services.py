"""Service interfaces (ports) for the application layer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from sikap.application.dtos.activity_log import ActivityLogEntryCreate
    from sikap.application.dtos.upload import ScanResult


class IContentScanner(Protocol):
    """Malicious-content scan capability.

    Callers must assume nothing about latency beyond "returns eventually";
    the orchestrator applies its own timeout.
    """

    async def scan(self, data: bytes) -> ScanResult:
        """Scan raw bytes and report whether they are clean."""
        ...


class IActivityLogService(Protocol):
    """Best-effort audit sink: failures are logged, never raised."""

    async def record(self, entry: ActivityLogEntryCreate) -> None:
        """Record an activity entry."""
        ...
