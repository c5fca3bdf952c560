"""Registry of named export handlers fed by the OpenTelemetry SDK."""

from __future__ import annotations

import logging
import threading
import weakref
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from opentelemetry.sdk.trace.export import BatchSpanProcessor, SpanExporter, SpanExportResult

from .otel_converter import otel_span_to_span_data

if TYPE_CHECKING:
    from collections.abc import Sequence

    from opentelemetry.sdk.trace import ReadableSpan, TracerProvider

    from ..types import SpanData

logger = logging.getLogger(__name__)


class Handler(ABC):
    """Receives batches of finished spans from the registry."""

    @abstractmethod
    def export(self, spans: Sequence[SpanData]) -> None:
        """
        Export a batch of spans.

        Raises:
            Exception: Any failure; the registry reports the batch as failed.
        """
        pass

    def shutdown(self) -> None:
        pass


class SpanExporterRegistry(SpanExporter):
    """
    OpenTelemetry span exporter that fans batches out to named handlers.

    Spans are converted to SpanData once per batch. Handlers can be
    registered and unregistered at any time; a handler that has been
    unregistered receives no further batches.

    Attach the registry to a TracerProvider with ``attach()``; it installs a
    BatchSpanProcessor at most once per provider.
    """

    _instance: SpanExporterRegistry | None = None
    _lock = threading.Lock()

    def __init__(self) -> None:
        self._handlers: dict[str, Handler] = {}
        self._handlers_lock = threading.Lock()
        self._attached: weakref.WeakKeyDictionary[TracerProvider, BatchSpanProcessor] = (
            weakref.WeakKeyDictionary()
        )

    @classmethod
    def get_instance(cls) -> SpanExporterRegistry:
        """Get the process-wide registry."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = SpanExporterRegistry()
        return cls._instance

    def attach(self, tracer_provider: TracerProvider) -> BatchSpanProcessor:
        """
        Feed spans ended on ``tracer_provider`` into this registry.

        Returns:
            The span processor installed on the provider
        """
        with self._handlers_lock:
            processor = self._attached.get(tracer_provider)
            if processor is None:
                processor = BatchSpanProcessor(self)
                tracer_provider.add_span_processor(processor)
                self._attached[tracer_provider] = processor
                logger.debug("Span exporter registry attached to tracer provider")
            return processor

    def register_handler(self, name: str, handler: Handler) -> None:
        with self._handlers_lock:
            self._handlers[name] = handler
        logger.debug(f"Registered export handler {name}")

    def unregister_handler(self, name: str) -> None:
        with self._handlers_lock:
            self._handlers.pop(name, None)
        logger.debug(f"Unregistered export handler {name}")

    def get_handlers(self) -> dict[str, Handler]:
        """Get a copy of the registered handlers by name."""
        with self._handlers_lock:
            return dict(self._handlers)

    def export(self, spans: Sequence[ReadableSpan]) -> SpanExportResult:
        handlers = self.get_handlers()
        if not handlers or not spans:
            return SpanExportResult.SUCCESS

        span_data = [otel_span_to_span_data(span) for span in spans]

        result = SpanExportResult.SUCCESS
        for name, handler in handlers.items():
            try:
                handler.export(span_data)
            except Exception as e:
                logger.error(f"Exception thrown by the export handler {name}: {e}")
                result = SpanExportResult.FAILURE
        return result

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        return True

    def shutdown(self) -> None:
        # Shared by several providers; handlers are shut down by whoever unregisters them
        logger.debug("Span exporter registry detached from a tracer provider")
