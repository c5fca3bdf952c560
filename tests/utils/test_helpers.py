"""Common test utilities for X-Ray exporter tests."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from xray_exporter.core.types import AttributeValue, SpanData, Status, Timestamp

# Bytes 1..16 and 1..8
TRACE_ID_BYTES = bytes(range(1, 17))
SPAN_ID_BYTES = bytes(range(1, 9))


def create_test_span(
    trace_id: bytes | None = None,
    span_id: bytes = SPAN_ID_BYTES,
    name: str = "test-span",
    parent_span_id: bytes | None = None,
    has_remote_parent: bool | None = None,
    start_timestamp: Timestamp | None = None,
    end_timestamp: Timestamp | None | bool = True,
    status: Status | None = None,
    attributes: dict[str, AttributeValue] | None = None,
) -> SpanData:
    """
    Create a minimal test span for unit tests.

    Args:
        trace_id: 16 bytes (default: current epoch followed by 12 bytes of 0xab)
        span_id: 8 bytes (default: 1..8)
        name: Span name
        parent_span_id: Parent span id bytes
        has_remote_parent: None, True or False
        start_timestamp: Start (default: now)
        end_timestamp: End; True for one second after start, None for an unfinished span
        status: Span status
        attributes: Span attributes

    Returns:
        SpanData instance for testing
    """
    from xray_exporter.core.types import SpanData, Timestamp

    if trace_id is None:
        trace_id = int(time.time()).to_bytes(4, "big") + b"\xab" * 12

    if start_timestamp is None:
        start_timestamp = Timestamp.from_nanos(time.time_ns())

    if end_timestamp is True:
        end_timestamp = Timestamp(seconds=start_timestamp.seconds + 1, nanos=start_timestamp.nanos)

    return SpanData(
        trace_id=trace_id,
        span_id=span_id,
        name=name,
        start_timestamp=start_timestamp,
        end_timestamp=end_timestamp or None,
        parent_span_id=parent_span_id,
        has_remote_parent=has_remote_parent,
        status=status,
        attributes=attributes or {},
    )


def create_otel_span(
    mocker: Any,
    name: str = "test-span",
    trace_id: int = 0x0102030405060708090A0B0C0D0E0F10,
    span_id: int = 0x0102030405060708,
    parent_span_id: int | None = None,
    parent_is_remote: bool = False,
    attributes: dict | None = None,
    start_time: int = 1700000000_000_000_000,
    end_time: int | None = 1700000001_000_000_000,
    status_code: Any = None,
    status_description: str | None = None,
) -> Any:
    """Create a mock OpenTelemetry ReadableSpan for testing."""
    from opentelemetry.sdk.trace import ReadableSpan
    from opentelemetry.trace import SpanContext
    from opentelemetry.trace.status import StatusCode as OTelStatusCode

    mock_span = mocker.MagicMock(spec=ReadableSpan)
    mock_span.name = name
    mock_span.start_time = start_time
    mock_span.end_time = end_time

    mock_context = mocker.MagicMock(spec=SpanContext)
    mock_context.trace_id = trace_id
    mock_context.span_id = span_id
    mock_span.context = mock_context

    if parent_span_id is not None:
        mock_parent = mocker.MagicMock()
        mock_parent.span_id = parent_span_id
        mock_parent.is_remote = parent_is_remote
        mock_span.parent = mock_parent
    else:
        mock_span.parent = None

    mock_span.attributes = attributes or {}

    mock_status = mocker.MagicMock()
    mock_status.status_code = status_code if status_code is not None else OTelStatusCode.UNSET
    mock_status.description = status_description
    mock_span.status = mock_status

    return mock_span
