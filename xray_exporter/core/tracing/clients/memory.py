"""In-memory X-Ray client for testing and development."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from .base import PutTraceSegmentsResult, UnprocessedTraceSegment, XRayClient

if TYPE_CHECKING:
    from collections.abc import Sequence


class InMemoryXRayClient(XRayClient):
    """
    Stores submitted documents in memory.

    ``unprocessed_count`` makes every following submission report that many
    documents as refused; ``error`` makes it raise instead.
    """

    def __init__(self) -> None:
        self._batches: list[list[str]] = []
        self._lock = threading.Lock()
        self.unprocessed_count = 0
        self.error: Exception | None = None

    def __repr__(self) -> str:
        return f"InMemoryXRayClient(batches={len(self._batches)})"

    @property
    def name(self) -> str:
        return "in-memory"

    def put_trace_segments(self, documents: Sequence[str]) -> PutTraceSegmentsResult:
        if self.error is not None:
            raise self.error

        with self._lock:
            self._batches.append(list(documents))

        return PutTraceSegmentsResult(
            unprocessed=[
                UnprocessedTraceSegment(id=str(index), error_code="Test", message="refused")
                for index in range(min(self.unprocessed_count, len(documents)))
            ]
        )

    def get_batches(self) -> list[list[str]]:
        with self._lock:
            return [list(batch) for batch in self._batches]

    def get_all_documents(self) -> list[str]:
        with self._lock:
            return [document for batch in self._batches for document in batch]

    def clear(self) -> None:
        with self._lock:
            self._batches.clear()

    def shutdown(self) -> None:
        self.clear()
