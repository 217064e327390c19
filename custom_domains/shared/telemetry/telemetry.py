"""OpenTelemetry setup: tracer provider, span exporter, FastAPI and logging instrumentation.

Exporters: "otlp" (gRPC collector such as Jaeger or Tempo), "console" for
local development, "none" to sample without exporting. Telemetry never
blocks startup: a failed setup is logged and the app runs untraced.
"""

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased

from custom_domains.core.config import Settings
from custom_domains.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

# Liveness probes would otherwise produce a trace every few seconds.
EXCLUDED_URLS = "/api/v1/health"


def _build_exporter(kind: str, otlp_endpoint: str | None) -> SpanExporter | None:
    if kind == "none":
        return None
    if kind == "otlp":
        if not otlp_endpoint:
            logger.warning("TELEMETRY_EXPORTER=otlp without TELEMETRY_OTLP_ENDPOINT; using console")
            return ConsoleSpanExporter()
        return OTLPSpanExporter(
            endpoint=otlp_endpoint, insecure=otlp_endpoint.startswith("http://")
        )
    if kind != "console":
        logger.warning("Unknown telemetry exporter %r; using console", kind)
    return ConsoleSpanExporter()


def setup_tracing(app: FastAPI, settings: Settings) -> TracerProvider | None:
    """Install the global tracer provider and instrument app and logging.

    Returns:
        The provider (keep it for shutdown_tracing), or None when setup failed.
    """
    try:
        provider = TracerProvider(
            resource=Resource(
                attributes={
                    SERVICE_NAME: settings.app_name,
                    SERVICE_VERSION: settings.app_version,
                    "deployment.environment": settings.telemetry_environment,
                }
            ),
            sampler=ParentBased(TraceIdRatioBased(settings.telemetry_sample_rate)),
        )
        exporter = _build_exporter(
            settings.telemetry_exporter, settings.telemetry_otlp_endpoint
        )
        if exporter is not None:
            provider.add_span_processor(BatchSpanProcessor(exporter))
        trace.set_tracer_provider(provider)

        FastAPIInstrumentor.instrument_app(
            app, tracer_provider=provider, excluded_urls=EXCLUDED_URLS
        )
        # Adds otelTraceID/otelSpanID to records; our own format stays in place.
        LoggingInstrumentor().instrument(tracer_provider=provider, set_logging_format=False)
    except Exception:
        logger.exception("Telemetry setup failed; continuing without tracing")
        return None

    logger.info(
        "Tracing enabled: service=%s exporter=%s sample_rate=%s",
        settings.app_name,
        settings.telemetry_exporter,
        settings.telemetry_sample_rate,
    )
    return provider


def shutdown_tracing(provider: TracerProvider | None) -> None:
    """Flush pending spans and stop the provider."""
    if provider is None:
        return
    try:
        provider.shutdown()
    except Exception:
        logger.exception("Error flushing spans on shutdown")
