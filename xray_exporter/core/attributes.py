"""Projection of span attributes onto segment annotations and sub-documents."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .ids import generate_id
from .segment import REMOTE_NAMESPACE, SUBSEGMENT_TYPE, Http, HttpRequest, HttpResponse, Segment, Sql
from .types import AttributeType, AttributeValue

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

SQL_QUERY_ATTRIBUTE = "sql.query"
SQL_SUBSEGMENT_NAME = "sql.query"
NAME_ANNOTATION = "name"

# OpenTelemetry semantic conventions, old and current names
HTTP_METHOD_ATTRIBUTES = ("http.request.method", "http.method")
HTTP_URL_ATTRIBUTES = ("url.full", "http.url")
HTTP_STATUS_CODE_ATTRIBUTES = ("http.response.status_code", "http.status_code")
USER_ATTRIBUTE = "enduser.id"


def attribute_value_to_object(value: AttributeValue) -> Any:
    """Coerce a tagged attribute value to its natural JSON scalar."""
    if value.type == AttributeType.STRING:
        return str(value.value)
    if value.type == AttributeType.BOOLEAN:
        return bool(value.value)
    if value.type == AttributeType.LONG:
        return int(value.value)
    if value.type == AttributeType.DOUBLE:
        return float(value.value)
    return None


def attribute_value_to_string(value: AttributeValue) -> str:
    """Render a tagged attribute value as text. Unknown tags render empty."""
    if value.type is None:
        return ""
    if value.type == AttributeType.BOOLEAN:
        return "true" if value.value else "false"
    return str(value.value)


def make_annotations(
    name: str, attributes: Mapping[str, AttributeValue]
) -> tuple[dict[str, Any], str | None]:
    """
    Copy span attributes into annotations.

    The span name is always recorded under ``"name"``. The ``sql.query``
    attribute is held back and returned separately so the caller can lift it
    into a SQL subsegment.

    Args:
        name: The original span name
        attributes: The span's attributes

    Returns:
        Tuple of (annotations, captured SQL query or None)
    """
    annotations: dict[str, Any] = {NAME_ANNOTATION: name}
    sql_query: str | None = None

    for key, value in attributes.items():
        if key == SQL_QUERY_ATTRIBUTE:
            sql_query = attribute_value_to_string(value)
            continue

        if value.type is None:
            logger.debug(f"Attribute {key} has an unsupported value type, annotating as null")
        annotations[key] = attribute_value_to_object(value)

    return annotations, sql_query


def make_sql_subsegment(parent: Segment, query: str) -> Segment:
    """Create the remote subsegment describing a SQL call made by ``parent``."""
    return Segment(
        name=SQL_SUBSEGMENT_NAME,
        id=generate_id(),
        trace_id=parent.trace_id,
        start_time=parent.start_time,
        parent_id=parent.id,
        end_time=parent.end_time,
        in_progress=parent.in_progress,
        type=SUBSEGMENT_TYPE,
        namespace=REMOTE_NAMESPACE,
        sql=Sql(sanitized_query=query),
    )


def _first_present(attributes: Mapping[str, AttributeValue], keys: tuple[str, ...]) -> Any:
    for key in keys:
        value = attributes.get(key)
        if value is not None and value.type is not None:
            return value.value
    return None


def make_http(attributes: Mapping[str, AttributeValue]) -> Http | None:
    """Build the ``http`` block from HTTP semantic-convention attributes."""
    method = _first_present(attributes, HTTP_METHOD_ATTRIBUTES)
    url = _first_present(attributes, HTTP_URL_ATTRIBUTES)
    status = _first_present(attributes, HTTP_STATUS_CODE_ATTRIBUTES)

    request = None
    if method is not None or url is not None:
        request = HttpRequest(
            method=str(method) if method is not None else None,
            url=str(url) if url is not None else None,
        )

    response = None
    if status is not None:
        try:
            response = HttpResponse(status=int(status))
        except (TypeError, ValueError):
            logger.debug(f"Ignoring non-numeric HTTP status code: {status!r}")

    if request is None and response is None:
        return None
    return Http(request=request, response=response)


def make_user(attributes: Mapping[str, AttributeValue]) -> str | None:
    value = attributes.get(USER_ATTRIBUTE)
    if value is None or value.type is None:
        return None
    return attribute_value_to_string(value)
