"""Content scanner factory: selects the scanner implementation from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sikap.application.interfaces.services import IContentScanner

if TYPE_CHECKING:
    from sikap.core.config import Settings


def create_content_scanner(settings: "Settings") -> IContentScanner:
    """Return the scanner named by settings.scanner_backend.

    Raises:
        ValueError: Unknown backend.
    """
    backend = settings.scanner_backend.lower()
    if backend == "pattern":
        from sikap.infrastructure.external.scanning.pattern_scanner import (
            PatternContentScanner,
        )

        return PatternContentScanner(
            simulated_delay_seconds=settings.scan_simulated_delay_seconds
        )
    raise ValueError(f"Unknown scanner backend: {backend}. Supported: 'pattern'")
