"""Conversion of OpenTelemetry spans into the exporter's SpanData."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from opentelemetry.trace.status import StatusCode as OTelStatusCode

from ..types import AttributeValue, CanonicalCode, SpanData, Status, Timestamp

if TYPE_CHECKING:
    from collections.abc import Mapping

    from opentelemetry.sdk.trace import ReadableSpan
    from opentelemetry.trace.status import Status as OTelStatus

logger = logging.getLogger(__name__)

# OpenTelemetry has no canonical status codes; the gRPC status code attribute carries them
STATUS_CODE_ATTRIBUTE = "rpc.grpc.status_code"


def trace_id_to_bytes(trace_id: int) -> bytes:
    """Convert an OpenTelemetry 128-bit trace id to 16 big-endian bytes."""
    return trace_id.to_bytes(16, "big")


def span_id_to_bytes(span_id: int) -> bytes:
    """Convert an OpenTelemetry 64-bit span id to 8 big-endian bytes."""
    return span_id.to_bytes(8, "big")


def ns_to_timestamp(ns: int) -> Timestamp:
    return Timestamp.from_nanos(ns)


def canonical_code_from_attributes(attributes: Mapping[str, Any] | None) -> CanonicalCode | None:
    """Read a canonical code from the gRPC status code attribute, if present and valid."""
    if not attributes:
        return None
    value = attributes.get(STATUS_CODE_ATTRIBUTE)
    if value is None or isinstance(value, bool):
        return None
    try:
        return CanonicalCode(int(value))
    except (TypeError, ValueError):
        logger.debug(f"Ignoring invalid {STATUS_CODE_ATTRIBUTE} attribute: {value!r}")
        return None


def otel_status_to_status(
    otel_status: OTelStatus | None, attributes: Mapping[str, Any] | None = None
) -> Status:
    """
    Convert an OpenTelemetry status to a canonical status.

    UNSET and OK both map to OK. ERROR maps to the code carried by the
    ``rpc.grpc.status_code`` attribute, or UNKNOWN when there is none.
    """
    if otel_status is None or otel_status.status_code != OTelStatusCode.ERROR:
        return Status(code=CanonicalCode.OK)

    code = canonical_code_from_attributes(attributes)
    if code is None or code == CanonicalCode.OK:
        code = CanonicalCode.UNKNOWN
    return Status(code=code, description=otel_status.description or None)


def otel_attributes_to_attribute_values(
    attributes: Mapping[str, Any] | None,
) -> dict[str, AttributeValue]:
    if not attributes:
        return {}
    return {key: AttributeValue.from_python(value) for key, value in attributes.items()}


def otel_span_to_span_data(span: ReadableSpan) -> SpanData:
    """
    Convert a finished OpenTelemetry span.

    A span without a parent becomes a root span (``has_remote_parent`` None);
    otherwise the parent context's ``is_remote`` flag decides.
    """
    context = span.context
    parent = span.parent

    parent_span_id = None
    has_remote_parent = None
    if parent is not None:
        parent_span_id = span_id_to_bytes(parent.span_id)
        has_remote_parent = bool(parent.is_remote)

    attributes = span.attributes

    return SpanData(
        trace_id=trace_id_to_bytes(context.trace_id),
        span_id=span_id_to_bytes(context.span_id),
        name=span.name,
        start_timestamp=ns_to_timestamp(span.start_time or 0),
        end_timestamp=ns_to_timestamp(span.end_time) if span.end_time is not None else None,
        parent_span_id=parent_span_id,
        has_remote_parent=has_remote_parent,
        status=otel_status_to_status(span.status, attributes),
        attributes=otel_attributes_to_attribute_values(attributes),
    )
