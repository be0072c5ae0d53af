"""Tests for OpenTelemetry setup."""

from opentelemetry.sdk.trace.export import ConsoleSpanExporter
from opentelemetry.sdk.trace.sampling import ALWAYS_OFF, ALWAYS_ON, ParentBased, TraceIdRatioBased

from kaltura_broker.telemetry import setup as telemetry_setup
from kaltura_broker.telemetry import setup_telemetry, shutdown_telemetry
from kaltura_broker.telemetry.setup import create_exporter, get_sampler


class TestTelemetry:
    """Tests for tracing configuration helpers."""

    def test_samplers(self):
        """Test sampler selection."""
        assert get_sampler("always_on", 1.0) is ALWAYS_ON
        assert get_sampler("always_off", 1.0) is ALWAYS_OFF
        assert isinstance(get_sampler("traceidratio", 0.5), TraceIdRatioBased)
        assert isinstance(get_sampler("parentbased_traceidratio", 0.5), ParentBased)

    def test_unknown_sampler_defaults_to_always_on(self):
        """Test fallback for unknown sampler names."""
        assert get_sampler("sometimes", 1.0) is ALWAYS_ON

    def test_console_exporter(self):
        """Test console exporter selection."""
        exporter = create_exporter("console", "http://localhost:4317", "http://localhost:4318")

        assert isinstance(exporter, ConsoleSpanExporter)

    def test_disabled_setup_is_noop(self):
        """Test that setup does nothing when tracing is disabled."""
        setup_telemetry()

        assert telemetry_setup._tracer_provider is None
        shutdown_telemetry()
        assert telemetry_setup._tracer_provider is None
