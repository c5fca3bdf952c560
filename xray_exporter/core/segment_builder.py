"""Translation of a finished span into an X-Ray segment document tree."""

from __future__ import annotations

from .attributes import make_annotations, make_http, make_sql_subsegment, make_user
from .ids import convert_to_amazon_span_id, convert_to_amazon_trace_id
from .naming import fix_segment_name
from .segment import REMOTE_NAMESPACE, SUBSEGMENT_TYPE, Segment
from .status import apply_status
from .types import SpanData, is_valid_span_id


def build_segment(
    span: SpanData,
    service_name: str = "",
    origin: str | None = None,
) -> Segment:
    """
    Build the segment for one span.

    The shape depends on where the span's parent lives:

    - no parent: a top-level segment
    - remote parent: a top-level segment in the ``remote`` namespace whose
      ``precursor_ids`` point at the upstream span
    - local parent: a subsegment named after the span (the method-level label)
      and linked with ``parent_id``

    Args:
        span: The finished span
        service_name: Name for top-level segments; the sanitized span name is
            used when empty
        origin: AWS resource type recorded on top-level segments

    Returns:
        The segment, with a SQL subsegment attached when the span carries a
        ``sql.query`` attribute
    """
    segment = Segment(
        name=service_name or fix_segment_name(span.name),
        id=convert_to_amazon_span_id(span.span_id),
        trace_id=convert_to_amazon_trace_id(span.trace_id),
        start_time=span.start_timestamp.to_epoch_seconds(),
    )

    if span.has_remote_parent is True:
        segment.namespace = REMOTE_NAMESPACE
        if is_valid_span_id(span.parent_span_id):
            segment.precursor_ids = [convert_to_amazon_span_id(span.parent_span_id)]
    elif span.has_remote_parent is False and is_valid_span_id(span.parent_span_id):
        segment.type = SUBSEGMENT_TYPE
        segment.parent_id = convert_to_amazon_span_id(span.parent_span_id)
        segment.name = fix_segment_name(span.name)

    if not segment.is_subsegment:
        segment.origin = origin
        segment.user = make_user(span.attributes)

    if span.end_timestamp is None:
        segment.in_progress = True
    else:
        segment.end_time = span.end_timestamp.to_epoch_seconds()

    apply_status(segment, span.status)

    segment.annotations, sql_query = make_annotations(span.name, span.attributes)
    segment.http = make_http(span.attributes)

    if sql_query is not None:
        segment.add_subsegment(make_sql_subsegment(segment, sql_query))

    return segment
