"""Tests for otel_converter.py - OpenTelemetry span to SpanData conversion."""

from __future__ import annotations

from opentelemetry.trace.status import Status as OTelStatus
from opentelemetry.trace.status import StatusCode as OTelStatusCode

from tests.utils import create_otel_span
from xray_exporter.core.tracing.otel_converter import (
    STATUS_CODE_ATTRIBUTE,
    canonical_code_from_attributes,
    otel_attributes_to_attribute_values,
    otel_span_to_span_data,
    otel_status_to_status,
    span_id_to_bytes,
    trace_id_to_bytes,
)
from xray_exporter.core.types import AttributeType, CanonicalCode, Timestamp


class TestIdConversion:
    """Tests for id conversion helpers."""

    def test_trace_id_to_bytes(self):
        assert trace_id_to_bytes(0x0102030405060708090A0B0C0D0E0F10) == bytes(range(1, 17))

    def test_span_id_to_bytes(self):
        assert span_id_to_bytes(0x0102030405060708) == bytes(range(1, 9))

    def test_small_ids_are_zero_padded(self):
        assert trace_id_to_bytes(1) == b"\x00" * 15 + b"\x01"
        assert span_id_to_bytes(1) == b"\x00" * 7 + b"\x01"


class TestCanonicalCodeFromAttributes:
    """Tests for canonical_code_from_attributes function."""

    def test_reads_grpc_status_code(self):
        assert canonical_code_from_attributes({STATUS_CODE_ATTRIBUTE: 8}) == CanonicalCode.RESOURCE_EXHAUSTED

    def test_missing_attribute(self):
        assert canonical_code_from_attributes({}) is None
        assert canonical_code_from_attributes(None) is None

    def test_invalid_values(self):
        assert canonical_code_from_attributes({STATUS_CODE_ATTRIBUTE: 99}) is None
        assert canonical_code_from_attributes({STATUS_CODE_ATTRIBUTE: "abc"}) is None
        assert canonical_code_from_attributes({STATUS_CODE_ATTRIBUTE: True}) is None


class TestOtelStatusToStatus:
    """Tests for otel_status_to_status function."""

    def test_unset_is_ok(self):
        assert otel_status_to_status(OTelStatus(OTelStatusCode.UNSET)).code == CanonicalCode.OK

    def test_ok_is_ok(self):
        assert otel_status_to_status(OTelStatus(OTelStatusCode.OK)).code == CanonicalCode.OK

    def test_missing_status_is_ok(self):
        assert otel_status_to_status(None).code == CanonicalCode.OK

    def test_error_without_code_is_unknown(self):
        status = otel_status_to_status(OTelStatus(OTelStatusCode.ERROR, "boom"))

        assert status.code == CanonicalCode.UNKNOWN
        assert status.description == "boom"

    def test_error_uses_grpc_status_code(self):
        status = otel_status_to_status(
            OTelStatus(OTelStatusCode.ERROR), {STATUS_CODE_ATTRIBUTE: CanonicalCode.NOT_FOUND.value}
        )

        assert status.code == CanonicalCode.NOT_FOUND
        assert status.description is None

    def test_error_with_ok_code_is_unknown(self):
        """Should not report an ERROR span as OK."""
        status = otel_status_to_status(OTelStatus(OTelStatusCode.ERROR), {STATUS_CODE_ATTRIBUTE: 0})

        assert status.code == CanonicalCode.UNKNOWN


class TestOtelAttributes:
    """Tests for otel_attributes_to_attribute_values function."""

    def test_tags_values_by_type(self):
        values = otel_attributes_to_attribute_values(
            {"s": "x", "b": True, "i": 3, "f": 1.5, "seq": ("a", "b")}
        )

        assert values["s"].type == AttributeType.STRING
        assert values["b"].type == AttributeType.BOOLEAN
        assert values["i"].type == AttributeType.LONG
        assert values["f"].type == AttributeType.DOUBLE
        assert values["seq"].type is None

    def test_empty(self):
        assert otel_attributes_to_attribute_values(None) == {}


class TestOtelSpanToSpanData:
    """Tests for otel_span_to_span_data function."""

    def test_root_span(self, mocker):
        """Should convert a span without parent to a root span."""
        span = create_otel_span(mocker, name="root", attributes={"k": "v"})

        data = otel_span_to_span_data(span)

        assert data.trace_id == bytes(range(1, 17))
        assert data.span_id == bytes(range(1, 9))
        assert data.name == "root"
        assert data.parent_span_id is None
        assert data.has_remote_parent is None
        assert data.start_timestamp == Timestamp(seconds=1700000000, nanos=0)
        assert data.end_timestamp == Timestamp(seconds=1700000001, nanos=0)
        assert data.status.code == CanonicalCode.OK
        assert data.attributes["k"].value == "v"

    def test_local_parent(self, mocker):
        span = create_otel_span(mocker, parent_span_id=0x090A0B0C0D0E0F10, parent_is_remote=False)

        data = otel_span_to_span_data(span)

        assert data.parent_span_id == bytes(range(9, 17))
        assert data.has_remote_parent is False

    def test_remote_parent(self, mocker):
        span = create_otel_span(mocker, parent_span_id=0x090A0B0C0D0E0F10, parent_is_remote=True)

        assert otel_span_to_span_data(span).has_remote_parent is True

    def test_unfinished_span(self, mocker):
        span = create_otel_span(mocker, end_time=None)

        assert otel_span_to_span_data(span).end_timestamp is None

    def test_error_status(self, mocker):
        span = create_otel_span(
            mocker,
            attributes={STATUS_CODE_ATTRIBUTE: CanonicalCode.UNAVAILABLE.value},
            status_code=OTelStatusCode.ERROR,
            status_description="down",
        )

        status = otel_span_to_span_data(span).status

        assert status.code == CanonicalCode.UNAVAILABLE
        assert status.description == "down"
