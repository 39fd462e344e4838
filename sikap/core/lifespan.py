"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Used by main.py; no business
logic here, only wiring of infrastructure (logging, telemetry, DB engine
dispose).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from sikap.core.config import get_settings
from sikap.infrastructure.persistence import database
from sikap.shared.telemetry.logging import setup_logging
from sikap.shared.telemetry.telemetry import (
    TelemetryConfig,
    get_telemetry,
    set_telemetry,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, database check, telemetry (if enabled).
    Shutdown order: telemetry shutdown, SQL engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    setup_logging()

    if not settings.database_url:
        logger.warning(
            "DATABASE_URL is not set; document endpoints will answer 503"
        )

    if settings.telemetry_enabled:
        telemetry = TelemetryConfig.from_settings(settings)
        if telemetry.start():
            set_telemetry(telemetry)
            telemetry.instrument(app, database.get_engine())

    logger.info(
        "%s %s started (storage_root=%s, scanner=%s)",
        settings.app_name,
        settings.app_version,
        settings.storage_root,
        settings.scanner_backend,
    )

    yield

    # ---- Shutdown ----
    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        set_telemetry(None)
        logger.info("Telemetry shutdown complete")

    if database.engine is not None:
        await database.dispose_engine()
        logger.info("Database engine disposed")
