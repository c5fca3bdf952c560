"""Core module for the X-Ray exporter."""

from .types import AttributeType, AttributeValue, CanonicalCode, SpanData, Status, Timestamp
from .segment import Cause, ExceptionRecord, Http, HttpRequest, HttpResponse, Segment, Sql
from .config import (
    XRayExporterConfig,
    XRayFileConfig,
    find_project_root,
    load_xray_config,
)
from .errors import AlreadyRegisteredError, NotRegisteredError
from .ids import convert_to_amazon_span_id, convert_to_amazon_trace_id, generate_id
from .naming import fix_segment_name
from .status import StatusFlags, apply_status, classify_status, make_cause
from .attributes import make_annotations, make_sql_subsegment
from .segment_builder import build_segment
from .xray_trace_exporter import REGISTER_NAME, XRayTraceExporter

__all__ = [
    # Registration
    "XRayTraceExporter",
    "REGISTER_NAME",
    # Config
    "XRayExporterConfig",
    "XRayFileConfig",
    "load_xray_config",
    "find_project_root",
    # Errors
    "AlreadyRegisteredError",
    "NotRegisteredError",
    # Span input
    "SpanData",
    "Status",
    "CanonicalCode",
    "Timestamp",
    "AttributeType",
    "AttributeValue",
    # Segment documents
    "Segment",
    "Cause",
    "ExceptionRecord",
    "Http",
    "HttpRequest",
    "HttpResponse",
    "Sql",
    # Translation
    "build_segment",
    "convert_to_amazon_span_id",
    "convert_to_amazon_trace_id",
    "generate_id",
    "fix_segment_name",
    "StatusFlags",
    "classify_status",
    "make_cause",
    "apply_status",
    "make_annotations",
    "make_sql_subsegment",
]
