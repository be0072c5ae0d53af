"""OpenTelemetry setup and configuration."""

import logging
from typing import TYPE_CHECKING

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.trace.sampling import (
    ALWAYS_OFF,
    ALWAYS_ON,
    ParentBased,
    TraceIdRatioBased,
)

if TYPE_CHECKING:
    from opentelemetry.sdk.trace.export import SpanExporter
    from opentelemetry.sdk.trace.sampling import Sampler

logger = logging.getLogger(__name__)

_tracer_provider: TracerProvider | None = None

_SAMPLERS = {
    "always_on": lambda arg: ALWAYS_ON,
    "always_off": lambda arg: ALWAYS_OFF,
    "traceidratio": lambda arg: TraceIdRatioBased(arg),
    "parentbased_always_on": lambda arg: ParentBased(ALWAYS_ON),
    "parentbased_always_off": lambda arg: ParentBased(ALWAYS_OFF),
    "parentbased_traceidratio": lambda arg: ParentBased(TraceIdRatioBased(arg)),
}


def get_sampler(sampler_type: str, sampler_arg: float) -> "Sampler":
    """Get the sampler for the configured strategy."""
    factory = _SAMPLERS.get(sampler_type)
    if factory is None:
        logger.warning("Unknown sampler type '%s', using always_on", sampler_type)
        return ALWAYS_ON
    return factory(sampler_arg)


def create_exporter(
    exporter_type: str, otlp_endpoint: str, otlp_http_endpoint: str
) -> "SpanExporter":
    """Create the span exporter for the configured exporter type."""
    if exporter_type == "otlp":
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (
            OTLPSpanExporter,
        )

        return OTLPSpanExporter(endpoint=otlp_endpoint)

    if exporter_type == "otlp-http":
        from opentelemetry.exporter.otlp.proto.http.trace_exporter import (
            OTLPSpanExporter,
        )

        return OTLPSpanExporter(endpoint=f"{otlp_http_endpoint}/v1/traces")

    if exporter_type != "console":
        logger.warning("Unknown exporter type '%s', using console", exporter_type)
    return ConsoleSpanExporter()


def setup_telemetry() -> None:
    """Initialize OpenTelemetry tracing.

    Call this function early in application startup, before the FastAPI
    application is created.
    """
    global _tracer_provider

    from kaltura_broker.config import get_settings

    settings = get_settings()

    if not settings.otel_enabled:
        logger.debug("OpenTelemetry tracing is disabled")
        return

    logger.info(
        "Initializing OpenTelemetry tracing (service=%s, exporter=%s, sampler=%s)",
        settings.otel_service_name,
        settings.otel_exporter_type,
        settings.otel_traces_sampler,
    )

    resource = Resource.create(
        {
            "service.name": settings.otel_service_name,
            "service.version": "0.1.0",
            "deployment.environment": "development" if settings.debug else "production",
        }
    )

    _tracer_provider = TracerProvider(
        resource=resource,
        sampler=get_sampler(settings.otel_traces_sampler, settings.otel_traces_sampler_arg),
    )
    exporter = create_exporter(
        settings.otel_exporter_type,
        settings.otel_exporter_otlp_endpoint,
        settings.otel_exporter_otlp_http_endpoint,
    )
    _tracer_provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(_tracer_provider)

    # Inbound broker requests and the outbound partner registration call
    _instrument_fastapi()
    _instrument_httpx()

    logger.info("OpenTelemetry tracing initialized successfully")


def _instrument_fastapi() -> None:
    """Instrument FastAPI for automatic tracing."""
    try:
        from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

        FastAPIInstrumentor().instrument()
        logger.debug("FastAPI instrumentation enabled")
    except ImportError:
        logger.warning(
            "FastAPI instrumentation not available. "
            "Install with: pip install opentelemetry-instrumentation-fastapi"
        )


def _instrument_httpx() -> None:
    """Instrument HTTPX for automatic tracing of outgoing requests."""
    try:
        from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor

        HTTPXClientInstrumentor().instrument()
        logger.debug("HTTPX instrumentation enabled")
    except ImportError:
        logger.warning(
            "HTTPX instrumentation not available. "
            "Install with: pip install opentelemetry-instrumentation-httpx"
        )


def shutdown_telemetry() -> None:
    """Shutdown OpenTelemetry and flush any pending spans."""
    global _tracer_provider

    if _tracer_provider is not None:
        logger.info("Shutting down OpenTelemetry tracing")
        _tracer_provider.shutdown()
        _tracer_provider = None
