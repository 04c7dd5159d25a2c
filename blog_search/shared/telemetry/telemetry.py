"""OpenTelemetry tracing for the search service.

One tracer provider per process, built at startup from Settings. The FastAPI
app, the SQLAlchemy engine and stdlib logging are instrumented so search,
suggestion and analytics queries appear as child spans of the HTTP request
and log lines carry trace ids. Health probes are not traced.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased
from sqlalchemy.ext.asyncio import AsyncEngine

if TYPE_CHECKING:
    from blog_search.core.config import Settings

logger = logging.getLogger(__name__)

UNTRACED_URLS = "/health,/health/ready"


def build_exporter(exporter_type: str, otlp_endpoint: str | None) -> SpanExporter | None:
    """Span exporter for TELEMETRY_EXPORTER; None for "none".

    "otlp" without an endpoint and unknown names fall back to the console exporter.
    """
    if exporter_type == "none":
        return None
    if exporter_type == "otlp":
        if otlp_endpoint:
            return OTLPSpanExporter(
                endpoint=otlp_endpoint, insecure=otlp_endpoint.startswith("http://")
            )
        logger.warning("TELEMETRY_OTLP_ENDPOINT not set; exporting spans to console")
    elif exporter_type != "console":
        logger.warning("Unknown telemetry exporter %r; exporting spans to console", exporter_type)
    return ConsoleSpanExporter()


class TelemetryConfig:
    """Tracer provider plus the instrumentations attached to it."""

    def __init__(
        self,
        service_name: str,
        service_version: str,
        environment: str = "development",
    ) -> None:
        self.service_name = service_name
        self.service_version = service_version
        self.environment = environment
        self.tracer_provider: TracerProvider | None = None

    @classmethod
    def from_settings(cls, settings: "Settings") -> "TelemetryConfig":
        return cls(
            service_name=settings.app_name,
            service_version=settings.app_version,
            environment=settings.telemetry_environment,
        )

    def setup(
        self,
        exporter_type: str = "console",
        otlp_endpoint: str | None = None,
        sample_rate: float = 1.0,
    ) -> TracerProvider | None:
        """Create the tracer provider and make it global.

        Returns None (tracing stays a no-op) if the SDK could not be set up;
        a telemetry failure never blocks startup.
        """
        try:
            provider = TracerProvider(
                resource=Resource(
                    attributes={
                        SERVICE_NAME: self.service_name,
                        SERVICE_VERSION: self.service_version,
                        "deployment.environment": self.environment,
                    }
                ),
                sampler=TraceIdRatioBased(sample_rate),
            )
            exporter = build_exporter(exporter_type, otlp_endpoint)
            if exporter is not None:
                provider.add_span_processor(BatchSpanProcessor(exporter))
            trace.set_tracer_provider(provider)
        except Exception:
            logger.exception("Failed to initialize telemetry")
            return None
        self.tracer_provider = provider
        logger.info(
            "Tracing enabled: service=%s version=%s exporter=%s sample_rate=%s",
            self.service_name,
            self.service_version,
            exporter_type,
            sample_rate,
        )
        return provider

    def instrument(self, app: FastAPI, engine: AsyncEngine) -> None:
        """Attach FastAPI, SQLAlchemy and logging instrumentation (each independently)."""
        if self.tracer_provider is None:
            return
        provider = self.tracer_provider
        steps = {
            "FastAPI": lambda: FastAPIInstrumentor.instrument_app(
                app, tracer_provider=provider, excluded_urls=UNTRACED_URLS
            ),
            "SQLAlchemy": lambda: SQLAlchemyInstrumentor().instrument(
                engine=engine.sync_engine,
                tracer_provider=provider,
                enable_commenter=True,
            ),
            "logging": lambda: LoggingInstrumentor().instrument(
                tracer_provider=provider, set_logging_format=True
            ),
        }
        for name, step in steps.items():
            try:
                step()
            except Exception:
                logger.exception("Failed to instrument %s", name)

    def shutdown(self) -> None:
        """Flush pending spans and release the provider."""
        if self.tracer_provider is None:
            return
        try:
            self.tracer_provider.shutdown()
        except Exception:
            logger.exception("Error during telemetry shutdown")
        self.tracer_provider = None


_telemetry: TelemetryConfig | None = None
_telemetry_lock = threading.RLock()


def get_telemetry() -> TelemetryConfig | None:
    """Return the process telemetry set at startup (None when tracing is off)."""
    with _telemetry_lock:
        return _telemetry


def set_telemetry(telemetry: TelemetryConfig | None) -> None:
    """Set at startup, cleared on shutdown."""
    global _telemetry
    with _telemetry_lock:
        _telemetry = telemetry
