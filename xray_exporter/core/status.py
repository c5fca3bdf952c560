"""Classification of span status into X-Ray error, fault and throttle flags."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .ids import generate_id
from .segment import Cause, ExceptionRecord
from .types import CanonicalCode, Status

if TYPE_CHECKING:
    from .segment import Segment

# Client-side failures (HTTP 4xx)
_ERROR_CODES = frozenset(
    {
        CanonicalCode.CANCELLED,  # 499 Client Closed Request
        CanonicalCode.INVALID_ARGUMENT,  # 400 Bad Request
        CanonicalCode.NOT_FOUND,  # 404 Not Found
        CanonicalCode.ALREADY_EXISTS,  # 409 Conflict
        CanonicalCode.PERMISSION_DENIED,  # 403 Forbidden
        CanonicalCode.UNAUTHENTICATED,  # 401 Unauthorized
        CanonicalCode.FAILED_PRECONDITION,  # 400 Bad Request
        CanonicalCode.ABORTED,  # 409 Conflict
        CanonicalCode.OUT_OF_RANGE,  # 400 Bad Request
    }
)

# Server-side failures (HTTP 5xx)
_FAULT_CODES = frozenset(
    {
        CanonicalCode.UNKNOWN,
        CanonicalCode.DEADLINE_EXCEEDED,  # 504 Gateway Timeout
        CanonicalCode.UNIMPLEMENTED,  # 501 Not Implemented
        CanonicalCode.INTERNAL,
        CanonicalCode.UNAVAILABLE,  # 503 Service Unavailable
        CanonicalCode.DATA_LOSS,
    }
)


@dataclass(frozen=True)
class StatusFlags:
    """The X-Ray flags for one status. Unset flags are ``None``."""

    error: bool | None = None
    fault: bool | None = None
    throttle: bool | None = None


def classify_status(code: CanonicalCode) -> StatusFlags:
    """Map a canonical code to at most one of error, fault or throttle."""
    if code == CanonicalCode.OK:
        return StatusFlags()
    if code == CanonicalCode.RESOURCE_EXHAUSTED:  # 429 Too Many Requests
        return StatusFlags(throttle=True)
    if code in _ERROR_CODES:
        return StatusFlags(error=True)
    if code in _FAULT_CODES:
        return StatusFlags(fault=True)
    # Codes in neither set are treated as faults
    return StatusFlags(fault=True)


def make_cause(status: Status | None) -> Cause | None:
    """Build a cause holding the status description, if there is one."""
    if status is None or status.is_ok or not status.description:
        return None
    return Cause(exceptions=[ExceptionRecord(id=generate_id(), message=status.description)])


def apply_status(segment: Segment, status: Status | None) -> None:
    """Set the cause and the error/fault/throttle flag of a segment."""
    if status is None or status.is_ok:
        return

    segment.cause = make_cause(status)

    flags = classify_status(status.code)
    segment.error = flags.error
    segment.fault = flags.fault
    segment.throttle = flags.throttle
