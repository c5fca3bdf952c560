"""Base class for X-Ray backend clients."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


@dataclass
class UnprocessedTraceSegment:
    """A segment document the backend refused."""

    id: str | None = None
    error_code: str | None = None
    message: str | None = None


@dataclass
class PutTraceSegmentsResult:
    """Outcome of one batch submission."""

    unprocessed: list[UnprocessedTraceSegment] = field(default_factory=list)


class XRayClient(ABC):
    """
    Submits batches of serialized segment documents to X-Ray.

    Implementations raise on transport or API failure; refusals of
    individual documents are reported in the result instead.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Client name for logging."""
        pass

    @abstractmethod
    def put_trace_segments(self, documents: Sequence[str]) -> PutTraceSegmentsResult:
        """Submit the documents as a single batch."""
        pass

    def shutdown(self) -> None:
        """Release any held resources."""
        pass
