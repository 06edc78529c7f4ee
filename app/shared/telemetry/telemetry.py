"""OpenTelemetry tracing for the directory service.

Off unless TELEMETRY_ENABLED is set. When on, spans cover HTTP requests
(FastAPI), SQL statements (SQLAlchemy) and, with the Redis cache
backend, cache commands. Health probes are not traced.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.redis import RedisInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased
from sqlalchemy.ext.asyncio import AsyncEngine

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

# Comma-separated regexes matched against the request URL.
UNTRACED_URLS = "/api/v1/health"

EXPORTERS = ("console", "otlp", "none")


def _build_exporter(kind: str, otlp_endpoint: str | None) -> SpanExporter | None:
    """Span exporter for kind; None means spans are sampled but not shipped."""
    if kind == "otlp":
        if not otlp_endpoint:
            logger.warning("TELEMETRY_EXPORTER=otlp without an endpoint; using console")
            return ConsoleSpanExporter()
        return OTLPSpanExporter(
            endpoint=otlp_endpoint, insecure=otlp_endpoint.startswith("http://")
        )
    if kind == "none":
        return None
    if kind != "console":
        logger.warning("Unknown telemetry exporter %r; using console", kind)
    return ConsoleSpanExporter()


class TelemetryConfig:
    """Tracer provider plus the instrumentations attached to it.

    Build with from_settings(), call setup_telemetry() once at startup,
    then the instrument_* methods, and shutdown() on exit. Every step
    logs and carries on if OpenTelemetry fails: tracing never stops the
    listing from serving.
    """

    def __init__(
        self,
        service_name: str,
        service_version: str,
        enabled: bool = True,
        environment: str = "development",
    ) -> None:
        self.service_name = service_name
        self.service_version = service_version
        self.enabled = enabled
        self.environment = environment
        self.tracer_provider: TracerProvider | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> TelemetryConfig:
        return cls(
            service_name=settings.app_name,
            service_version=settings.app_version,
            enabled=settings.telemetry_enabled,
            environment=settings.telemetry_environment,
        )

    @property
    def active(self) -> bool:
        return self.enabled and self.tracer_provider is not None

    def setup_telemetry(
        self,
        exporter_type: str = "console",
        otlp_endpoint: str | None = None,
        sample_rate: float = 1.0,
    ) -> TracerProvider | None:
        """Create the tracer provider and install it globally.

        Args:
            exporter_type: One of EXPORTERS.
            otlp_endpoint: OTLP gRPC endpoint (e.g. http://collector:4317).
            sample_rate: Fraction of new traces to sample, 0.0 to 1.0.
                Child spans follow their parent's decision.

        Returns:
            The provider, or None when disabled or setup failed.
        """
        if not self.enabled:
            return None
        resource = Resource.create(
            {
                SERVICE_NAME: self.service_name,
                SERVICE_VERSION: self.service_version,
                "deployment.environment": self.environment,
            }
        )
        try:
            provider = TracerProvider(
                resource=resource, sampler=ParentBased(TraceIdRatioBased(sample_rate))
            )
            exporter = _build_exporter(exporter_type, otlp_endpoint)
            if exporter is not None:
                provider.add_span_processor(BatchSpanProcessor(exporter))
            trace.set_tracer_provider(provider)
        except Exception:
            logger.exception("Tracing setup failed; continuing without telemetry")
            return None
        self.tracer_provider = provider
        logger.info(
            "Tracing on: service=%s exporter=%s sample_rate=%s",
            self.service_name,
            exporter_type,
            sample_rate,
        )
        return provider

    def instrument_fastapi(self, app: FastAPI) -> None:
        """Trace incoming requests, except health probes."""
        if not self.active:
            return
        try:
            FastAPIInstrumentor.instrument_app(
                app, tracer_provider=self.tracer_provider, excluded_urls=UNTRACED_URLS
            )
        except Exception:
            logger.exception("FastAPI instrumentation failed")

    def instrument_sqlalchemy(self, engine: AsyncEngine) -> None:
        """Trace the user search and count queries."""
        if not self.active:
            return
        try:
            SQLAlchemyInstrumentor().instrument(
                engine=engine.sync_engine, tracer_provider=self.tracer_provider
            )
        except Exception:
            logger.exception("SQLAlchemy instrumentation failed")

    def instrument_redis(self) -> None:
        """Trace result cache GET/SETEX commands."""
        if not self.active:
            return
        try:
            RedisInstrumentor().instrument(tracer_provider=self.tracer_provider)
        except Exception:
            logger.exception("Redis instrumentation failed")

    def shutdown(self) -> None:
        """Flush pending spans and stop exporting."""
        provider, self.tracer_provider = self.tracer_provider, None
        if provider is None:
            return
        try:
            provider.shutdown()
        except Exception:
            logger.exception("Error flushing spans on shutdown")
        else:
            logger.info("Tracing stopped")


_telemetry: TelemetryConfig | None = None
_telemetry_lock = threading.Lock()


def get_telemetry() -> TelemetryConfig | None:
    """Return the telemetry installed at startup, if any."""
    with _telemetry_lock:
        return _telemetry


def set_telemetry(telemetry: TelemetryConfig | None) -> None:
    """Install (or clear, with None) the process-wide telemetry."""
    global _telemetry
    with _telemetry_lock:
        _telemetry = telemetry
