"""Core: config, lifespan, exception handlers, and rate limiting."""

from sikap.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
