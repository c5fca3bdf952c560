"""Test utilities for X-Ray exporter tests."""

from .test_helpers import create_test_span, create_otel_span, TRACE_ID_BYTES, SPAN_ID_BYTES

__all__ = [
    "create_test_span",
    "create_otel_span",
    "TRACE_ID_BYTES",
    "SPAN_ID_BYTES",
]
