"""Application lifespan: startup and shutdown.

Wiring of infrastructure only (logging, permission cache, tracing, DB engine
dispose).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from advisy.core.config import get_settings
from advisy.core.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: logging, telemetry (if enabled), Redis cache (if enabled).
    Shutdown: cache disconnect, telemetry flush, SQL engine dispose.
    """
    settings = get_settings()
    setup_logging()

    if settings.telemetry_enabled:
        from advisy.infrastructure.persistence.database import get_engine
        from advisy.shared.telemetry.telemetry import TelemetryConfig, set_telemetry

        telemetry = TelemetryConfig(
            service_name=settings.app_name,
            service_version=settings.app_version,
            enabled=True,
            environment=settings.telemetry_environment,
        )
        telemetry.setup_telemetry(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            jaeger_endpoint=settings.telemetry_jaeger_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        set_telemetry(telemetry)
        telemetry.instrument_fastapi(app)
        telemetry.instrument_sqlalchemy(get_engine())
        if settings.redis_enabled:
            telemetry.instrument_redis()
        logger.info("Telemetry initialized")

    if settings.redis_enabled:
        from advisy.infrastructure.cache.redis_cache import CacheService

        cache = CacheService()
        await cache.connect()
        app.state.cache = cache
    else:
        app.state.cache = None

    logger.info("%s %s started", settings.app_name, settings.app_version)

    yield

    cache = getattr(app.state, "cache", None)
    if cache is not None:
        await cache.disconnect()
        app.state.cache = None

    from advisy.shared.telemetry.telemetry import get_telemetry, set_telemetry

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        set_telemetry(None)

    from advisy.infrastructure.persistence.database import dispose_engine

    await dispose_engine()
    logger.info("%s stopped", settings.app_name)
