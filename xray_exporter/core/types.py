"""Core types describing finished spans handed to the exporter."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class CanonicalCode(Enum):
    """
    Canonical status codes shared across tracing implementations.
    Values match the gRPC status codes.
    """

    OK = 0
    CANCELLED = 1
    UNKNOWN = 2
    INVALID_ARGUMENT = 3
    DEADLINE_EXCEEDED = 4
    NOT_FOUND = 5
    ALREADY_EXISTS = 6
    PERMISSION_DENIED = 7
    RESOURCE_EXHAUSTED = 8
    FAILED_PRECONDITION = 9
    ABORTED = 10
    OUT_OF_RANGE = 11
    UNIMPLEMENTED = 12
    INTERNAL = 13
    UNAVAILABLE = 14
    DATA_LOSS = 15
    UNAUTHENTICATED = 16


@dataclass
class Status:
    """Span completion status."""

    code: CanonicalCode = CanonicalCode.OK
    description: str | None = None

    @property
    def is_ok(self) -> bool:
        return self.code == CanonicalCode.OK


@dataclass
class Timestamp:
    """Timestamp in seconds and nanoseconds since epoch."""

    seconds: int = 0
    nanos: int = 0

    @classmethod
    def from_nanos(cls, ns: int) -> Timestamp:
        return cls(seconds=ns // 1_000_000_000, nanos=ns % 1_000_000_000)

    @classmethod
    def from_millis(cls, ms: int) -> Timestamp:
        return cls(seconds=ms // 1000, nanos=(ms % 1000) * 1_000_000)

    def to_epoch_seconds(self) -> float:
        return self.seconds + self.nanos / 1e9


class AttributeType(Enum):
    """Tags of the attribute value union."""

    STRING = "string"
    BOOLEAN = "boolean"
    LONG = "long"
    DOUBLE = "double"


@dataclass(frozen=True)
class AttributeValue:
    """
    Tagged attribute value.

    ``type`` is ``None`` when the producer handed over a value with no
    matching tag; such values project to JSON null.
    """

    type: AttributeType | None
    value: Any = None

    @classmethod
    def string_value(cls, value: str) -> AttributeValue:
        return cls(AttributeType.STRING, value)

    @classmethod
    def boolean_value(cls, value: bool) -> AttributeValue:
        return cls(AttributeType.BOOLEAN, value)

    @classmethod
    def long_value(cls, value: int) -> AttributeValue:
        return cls(AttributeType.LONG, value)

    @classmethod
    def double_value(cls, value: float) -> AttributeValue:
        return cls(AttributeType.DOUBLE, value)

    @classmethod
    def from_python(cls, value: Any) -> AttributeValue:
        """Wrap a plain Python attribute value, tagging it by its type."""
        # bool must be checked before int
        if isinstance(value, bool):
            return cls.boolean_value(value)
        if isinstance(value, str):
            return cls.string_value(value)
        if isinstance(value, int):
            return cls.long_value(value)
        if isinstance(value, float):
            return cls.double_value(value)
        return cls(None, value)


@dataclass
class SpanData:
    """
    A finished span as read by the exporter.

    Identifiers are raw big-endian bytes: 16 for the trace id and 8 for span
    ids. ``has_remote_parent`` is a tri-state: ``None`` for a root span,
    ``True`` when the parent lives in another process and ``False`` when it
    lives in this one.
    """

    trace_id: bytes
    span_id: bytes
    name: str
    start_timestamp: Timestamp
    end_timestamp: Timestamp | None = None
    parent_span_id: bytes | None = None
    has_remote_parent: bool | None = None
    status: Status | None = None
    attributes: dict[str, AttributeValue] = field(default_factory=dict)


def is_valid_span_id(span_id: bytes | None) -> bool:
    """A span id is valid when present and not all zeros."""
    return bool(span_id) and any(span_id)
