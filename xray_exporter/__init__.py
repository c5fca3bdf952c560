"""AWS X-Ray trace exporter for OpenTelemetry."""

from .core import (
    REGISTER_NAME,
    AlreadyRegisteredError,
    AttributeValue,
    CanonicalCode,
    NotRegisteredError,
    Segment,
    SpanData,
    Status,
    Timestamp,
    XRayExporterConfig,
    XRayTraceExporter,
    build_segment,
    load_xray_config,
)
from .core.logger import LogLevel, configure_logger, get_log_level, set_log_level
from .core.tracing import SpanExporterRegistry, XRayExporterHandler
from .core.tracing.clients import (
    Boto3XRayClient,
    DaemonXRayClient,
    InMemoryXRayClient,
    PutTraceSegmentsResult,
    XRayClient,
)
from .version import SDK_VERSION

__version__ = SDK_VERSION

__all__ = [
    # Core
    "XRayTraceExporter",
    "XRayExporterHandler",
    "SpanExporterRegistry",
    "REGISTER_NAME",
    "build_segment",
    "Segment",
    "SpanData",
    "Status",
    "CanonicalCode",
    "Timestamp",
    "AttributeValue",
    # Errors
    "AlreadyRegisteredError",
    "NotRegisteredError",
    # Config
    "XRayExporterConfig",
    "load_xray_config",
    # Logger
    "LogLevel",
    "configure_logger",
    "set_log_level",
    "get_log_level",
    # Clients
    "XRayClient",
    "PutTraceSegmentsResult",
    "Boto3XRayClient",
    "DaemonXRayClient",
    "InMemoryXRayClient",
]
