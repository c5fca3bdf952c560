"""Tracing runtime integration for the X-Ray exporter."""

from .span_exporter import Handler, SpanExporterRegistry
from .exporter_handler import (
    DIAGNOSTIC_SPAN_NAME,
    XRayExporterHandler,
    create_diagnostic_tracer_provider,
    set_canonical_status,
)
from .otel_converter import (
    STATUS_CODE_ATTRIBUTE,
    otel_span_to_span_data,
    otel_status_to_status,
    span_id_to_bytes,
    trace_id_to_bytes,
)

__all__ = [
    # Runtime registry
    "Handler",
    "SpanExporterRegistry",
    # Export
    "XRayExporterHandler",
    "DIAGNOSTIC_SPAN_NAME",
    "create_diagnostic_tracer_provider",
    "set_canonical_status",
    # OpenTelemetry integration
    "STATUS_CODE_ATTRIBUTE",
    "otel_span_to_span_data",
    "otel_status_to_status",
    "trace_id_to_bytes",
    "span_id_to_bytes",
]
