"""Export handler that converts span batches to segments and sends them to X-Ray."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased
from opentelemetry.trace.status import Status as OTelStatus
from opentelemetry.trace.status import StatusCode as OTelStatusCode

from ..config import DEFAULT_DIAGNOSTIC_SAMPLING_RATE
from ..segment import DAEMON_HEADER
from ..segment_builder import build_segment
from ..types import CanonicalCode
from .otel_converter import STATUS_CODE_ATTRIBUTE
from .span_exporter import Handler

if TYPE_CHECKING:
    from collections.abc import Sequence

    from opentelemetry.trace import Span as OTelSpan
    from opentelemetry.trace import Tracer

    from ..segment import Segment
    from ..types import SpanData
    from .clients.base import XRayClient

logger = logging.getLogger(__name__)

DIAGNOSTIC_SPAN_NAME = "SendXRaySpans"
INSTRUMENTATION_NAME = "xray_exporter"


def create_diagnostic_tracer_provider(
    sampling_rate: float = DEFAULT_DIAGNOSTIC_SAMPLING_RATE,
) -> TracerProvider:
    """Create the provider for the exporter's own spans, sampled at ``sampling_rate``."""
    return TracerProvider(sampler=TraceIdRatioBased(sampling_rate), shutdown_on_exit=False)


def set_canonical_status(span: OTelSpan, code: CanonicalCode, description: str | None = None) -> None:
    """
    Record a canonical status on an OpenTelemetry span.

    OpenTelemetry only knows OK and ERROR, so the canonical code is also
    stored in the gRPC status code attribute.
    """
    span.set_attribute(STATUS_CODE_ATTRIBUTE, code.value)
    if code == CanonicalCode.OK:
        span.set_status(OTelStatus(OTelStatusCode.OK))
    else:
        span.set_status(OTelStatus(OTelStatusCode.ERROR, description))


def _describe(error: BaseException) -> str:
    return str(error) or type(error).__name__


class XRayExporterHandler(Handler):
    """
    Converts each batch of spans to X-Ray segment documents and submits them
    in a single call.

    Each export runs inside a ``SendXRaySpans`` span so the exporter's own
    health shows up in traces. Submission and serialization failures are
    recorded on that span and re-raised; refused documents are logged and
    recorded, but not retried.
    """

    def __init__(
        self,
        client: XRayClient,
        service_name: str = "",
        use_daemon: bool = False,
        origin: str | None = None,
        tracer: Tracer | None = None,
        diagnostic_provider: TracerProvider | None = None,
    ) -> None:
        """
        Initialize the handler.

        Args:
            client: Backend client that submits the documents
            service_name: Name for top-level segments (span names when empty)
            use_daemon: Prepend the daemon header to every document
            origin: AWS resource type recorded on top-level segments
            tracer: Tracer for the diagnostic span (taken from
                ``diagnostic_provider`` if None)
            diagnostic_provider: Provider of the diagnostic span, shut down with
                the handler (a rarely-sampling one is created when neither it
                nor ``tracer`` is given)
        """
        self._client = client
        self._service_name = service_name
        self._use_daemon = use_daemon
        self._origin = origin
        if tracer is None and diagnostic_provider is None:
            diagnostic_provider = create_diagnostic_tracer_provider()
        self._diagnostic_provider = diagnostic_provider
        self._tracer = tracer or diagnostic_provider.get_tracer(INSTRUMENTATION_NAME)

    def __repr__(self) -> str:
        return (
            f"XRayExporterHandler(client={self._client.name}, service_name={self._service_name!r}, "
            f"use_daemon={self._use_daemon})"
        )

    @property
    def client(self) -> XRayClient:
        return self._client

    @property
    def service_name(self) -> str:
        return self._service_name

    @property
    def use_daemon(self) -> bool:
        return self._use_daemon

    def generate_segment(self, span: SpanData) -> Segment:
        return build_segment(span, service_name=self._service_name, origin=self._origin)

    def encode(self, span: SpanData) -> str:
        """Build and serialize the segment document for one span."""
        document = self.generate_segment(span).to_json()
        if self._use_daemon:
            document = DAEMON_HEADER + document
        return document

    def export(self, spans: Sequence[SpanData]) -> None:
        with self._tracer.start_as_current_span(
            DIAGNOSTIC_SPAN_NAME, set_status_on_exception=False
        ) as diagnostic_span:
            try:
                documents = [self.encode(span) for span in spans]
            except (TypeError, ValueError) as e:
                set_canonical_status(diagnostic_span, CanonicalCode.UNKNOWN, _describe(e))
                raise

            try:
                result = self._client.put_trace_segments(documents)
            except Exception as e:
                set_canonical_status(diagnostic_span, CanonicalCode.UNKNOWN, _describe(e))
                raise

            if result.unprocessed:
                set_canonical_status(diagnostic_span, CanonicalCode.DATA_LOSS)
                logger.warning(f"UnprocessedTraceSegments exist: count={len(result.unprocessed)}")
            else:
                logger.debug(f"Exported {len(documents)} segments via {self._client.name}")

    def shutdown(self) -> None:
        if self._diagnostic_provider is not None:
            self._diagnostic_provider.shutdown()
            self._diagnostic_provider = None
        self._client.shutdown()
