"""Application lifespan: startup and shutdown.

Single place for startup/shutdown wiring: logging, telemetry, search schema
bootstrap, DB engine dispose. No business logic here.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from blog_search.core.config import get_settings
from blog_search.infrastructure.persistence import database
from blog_search.infrastructure.persistence.search_indexes import ensure_search_schema
from blog_search.shared.telemetry import (
    TelemetryConfig,
    get_telemetry,
    set_telemetry,
    setup_logging,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: logging, tracing (TELEMETRY_ENABLED), search schema bootstrap
    (SEARCH_ENSURE_INDEXES). Shutdown: flush spans, dispose the SQL engine.
    """
    settings = get_settings()
    setup_logging()

    if settings.telemetry_enabled:
        telemetry = TelemetryConfig.from_settings(settings)
        if telemetry.setup(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        ):
            telemetry.instrument(app, database.get_engine())
            set_telemetry(telemetry)

    if settings.search_ensure_indexes:
        await ensure_search_schema(
            database.get_engine(),
            text_config=settings.search_text_config,
            unaccent=settings.search_unaccent_enabled,
        )

    logger.info("%s %s started", settings.app_name, settings.app_version)

    yield

    telemetry = get_telemetry()
    if telemetry is not None:
        telemetry.shutdown()
        set_telemetry(None)
        logger.info("Telemetry shutdown complete")

    await database.dispose_engine()
    logger.info("Database engine disposed")
