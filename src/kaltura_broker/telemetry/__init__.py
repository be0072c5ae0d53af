"""OpenTelemetry integration for distributed tracing."""

from kaltura_broker.telemetry.setup import setup_telemetry, shutdown_telemetry

__all__ = ["setup_telemetry", "shutdown_telemetry"]
