"""Startup and shutdown for the directory app.

Startup builds the result cache (app.state.cache, read by the listing
dependencies) and, when enabled, tracing. Shutdown releases both and
disposes the SQL engine.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.core.config import Settings, get_settings
from app.infrastructure.cache import build_cache
from app.infrastructure.persistence import database
from app.shared.telemetry.telemetry import TelemetryConfig, get_telemetry, set_telemetry

logger = logging.getLogger(__name__)


def _start_telemetry(app: FastAPI, settings: Settings) -> None:
    telemetry = TelemetryConfig.from_settings(settings)
    if telemetry.setup_telemetry(
        exporter_type=settings.telemetry_exporter,
        otlp_endpoint=settings.telemetry_otlp_endpoint,
        sample_rate=settings.telemetry_sample_rate,
    ) is None:
        return
    set_telemetry(telemetry)
    telemetry.instrument_fastapi(app)
    database._ensure_engine()
    telemetry.instrument_sqlalchemy(database.engine)
    if settings.cache_backend == "redis":
        telemetry.instrument_redis()


async def _stop_cache(app: FastAPI) -> None:
    cache = getattr(app.state, "cache", None)
    app.state.cache = None
    disconnect = getattr(cache, "disconnect", None)
    if disconnect is not None:
        await disconnect()


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """FastAPI lifespan: start cache and tracing, yield, then tear down in reverse."""
    settings = get_settings()

    app.state.cache = await build_cache(settings)
    logger.info("Result cache backend: %s", settings.cache_backend)
    if settings.telemetry_enabled:
        _start_telemetry(app, settings)

    yield

    await _stop_cache(app)
    telemetry = get_telemetry()
    if telemetry is not None:
        telemetry.shutdown()
        set_telemetry(None)
    await database.dispose_engine()
