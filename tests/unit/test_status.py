"""Tests for status.py - error, fault and throttle classification."""

from __future__ import annotations

import re

import pytest

from xray_exporter.core.segment import Segment
from xray_exporter.core.status import StatusFlags, apply_status, classify_status, make_cause
from xray_exporter.core.types import CanonicalCode, Status

ERROR_CODES = [
    CanonicalCode.CANCELLED,
    CanonicalCode.INVALID_ARGUMENT,
    CanonicalCode.NOT_FOUND,
    CanonicalCode.ALREADY_EXISTS,
    CanonicalCode.PERMISSION_DENIED,
    CanonicalCode.UNAUTHENTICATED,
    CanonicalCode.FAILED_PRECONDITION,
    CanonicalCode.ABORTED,
    CanonicalCode.OUT_OF_RANGE,
]

FAULT_CODES = [
    CanonicalCode.UNKNOWN,
    CanonicalCode.DEADLINE_EXCEEDED,
    CanonicalCode.UNIMPLEMENTED,
    CanonicalCode.INTERNAL,
    CanonicalCode.UNAVAILABLE,
    CanonicalCode.DATA_LOSS,
]


def _segment() -> Segment:
    return Segment(name="test", id="0102030405060708", trace_id="1-00000000-" + "0" * 24, start_time=1.0)


class TestClassifyStatus:
    """Tests for classify_status function."""

    def test_ok_sets_nothing(self):
        """Should set no flag for OK."""
        assert classify_status(CanonicalCode.OK) == StatusFlags()

    def test_resource_exhausted_is_throttle(self):
        """Should classify RESOURCE_EXHAUSTED as throttle."""
        assert classify_status(CanonicalCode.RESOURCE_EXHAUSTED) == StatusFlags(throttle=True)

    @pytest.mark.parametrize("code", ERROR_CODES)
    def test_client_codes_are_errors(self, code):
        """Should classify client-side codes as error."""
        assert classify_status(code) == StatusFlags(error=True)

    @pytest.mark.parametrize("code", FAULT_CODES)
    def test_server_codes_are_faults(self, code):
        """Should classify server-side codes as fault."""
        assert classify_status(code) == StatusFlags(fault=True)

    def test_every_failure_code_sets_exactly_one_flag(self):
        """Should give every non-OK code one of error, fault or throttle."""
        for code in CanonicalCode:
            if code == CanonicalCode.OK:
                continue
            flags = classify_status(code)
            assert [flags.error, flags.fault, flags.throttle].count(True) == 1, code

    @pytest.mark.parametrize("code", list(CanonicalCode))
    def test_at_most_one_flag(self, code):
        """Should never set more than one flag."""
        flags = classify_status(code)
        assert sum(bool(flag) for flag in (flags.error, flags.fault, flags.throttle)) <= 1


class TestMakeCause:
    """Tests for make_cause function."""

    def test_none_for_missing_status(self):
        """Should not build a cause without a status."""
        assert make_cause(None) is None

    def test_none_for_ok_status(self):
        """Should not build a cause for OK even with a description."""
        assert make_cause(Status(CanonicalCode.OK, "fine")) is None

    def test_none_without_description(self):
        """Should not build a cause when the description is empty."""
        assert make_cause(Status(CanonicalCode.INTERNAL)) is None
        assert make_cause(Status(CanonicalCode.INTERNAL, "")) is None

    def test_single_exception_with_description(self):
        """Should hold one exception carrying the description."""
        cause = make_cause(Status(CanonicalCode.NOT_FOUND, "no such row"))

        assert cause is not None
        assert len(cause.exceptions) == 1
        assert cause.exceptions[0].message == "no such row"
        assert re.match(r"^[0-9a-f]{16}$", cause.exceptions[0].id)


class TestApplyStatus:
    """Tests for apply_status function."""

    def test_throttled_span(self):
        """Should set throttle and the cause for RESOURCE_EXHAUSTED."""
        segment = _segment()

        apply_status(segment, Status(CanonicalCode.RESOURCE_EXHAUSTED, "rate limited"))

        assert segment.throttle is True
        assert segment.error is None
        assert segment.fault is None
        assert segment.cause is not None
        assert segment.cause.exceptions[0].message == "rate limited"

    def test_faulty_span_without_description(self):
        """Should set fault and no cause for INTERNAL without description."""
        segment = _segment()

        apply_status(segment, Status(CanonicalCode.INTERNAL))

        assert segment.fault is True
        assert segment.cause is None
        assert "cause" not in segment.to_dict()

    def test_ok_leaves_segment_untouched(self):
        """Should not touch the segment for OK."""
        segment = _segment()

        apply_status(segment, Status(CanonicalCode.OK))

        assert segment.to_dict() == _segment().to_dict()

    def test_missing_status_leaves_segment_untouched(self):
        """Should not touch the segment without a status."""
        segment = _segment()

        apply_status(segment, None)

        assert segment.to_dict() == _segment().to_dict()
