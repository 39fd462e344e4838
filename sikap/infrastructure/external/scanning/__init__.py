"""Content scanning backends behind IContentScanner."""

from sikap.infrastructure.external.scanning.factory import create_content_scanner
from sikap.infrastructure.external.scanning.pattern_scanner import (
    PatternContentScanner,
)

__all__ = ["PatternContentScanner", "create_content_scanner"]
