"""Conversion of trace and span identifiers to the X-Ray formats."""

from __future__ import annotations

import secrets
import time

TRACE_ID_VERSION = "1"

# X-Ray rejects trace ids whose embedded epoch is older than 28 days
MAX_AGE_SECONDS = 60 * 60 * 24 * 28
# or more than 5 minutes in the future
MAX_SKEW_SECONDS = 60 * 5

SPAN_ID_BYTES = 8
TRACE_ID_BYTES = 16
EPOCH_BYTES = 4


def convert_to_amazon_span_id(span_id: bytes) -> str:
    """
    Convert a span id to a 64-bit X-Ray segment id in 16 hexadecimal digits.

    Args:
        span_id: Raw span id bytes; only the first 8 are used

    Returns:
        16-character lowercase hex string
    """
    return span_id[:SPAN_ID_BYTES].rjust(SPAN_ID_BYTES, b"\x00").hex()


def convert_to_amazon_trace_id(trace_id: bytes, now: int | None = None) -> str:
    """
    Convert a 128-bit trace id to the X-Ray format ``1-XXXXXXXX-YYYY...``.

    The first 4 bytes are read as the epoch of the trace. When that epoch is
    outside the window X-Ray accepts, the current time is used instead.

    Args:
        trace_id: Raw 16-byte trace id
        now: Current epoch seconds (defaults to the wall clock)

    Returns:
        X-Ray trace id string
    """
    trace_id = trace_id[:TRACE_ID_BYTES].rjust(TRACE_ID_BYTES, b"\x00")
    epoch_now = int(time.time()) if now is None else now
    epoch = int.from_bytes(trace_id[:EPOCH_BYTES], "big", signed=False)

    delta = epoch_now - epoch
    if delta > MAX_AGE_SECONDS or -delta > MAX_SKEW_SECONDS:
        epoch = epoch_now

    return f"{TRACE_ID_VERSION}-{epoch:08x}-{trace_id[EPOCH_BYTES:].hex()}"


def generate_id() -> str:
    """Generate a random 16-hex-digit id for synthetic segments and exceptions."""
    return f"{secrets.randbits(63):016x}"
