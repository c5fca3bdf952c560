"""Segment documents as accepted by the X-Ray PutTraceSegments API.

Document reference:
https://docs.aws.amazon.com/xray/latest/devguide/xray-api-segmentdocuments.html

Optional fields left as ``None`` are omitted from the serialized document,
never emitted as JSON null.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

SUBSEGMENT_TYPE = "subsegment"
REMOTE_NAMESPACE = "remote"

# Header line the X-Ray daemon expects in front of every UDP document
DAEMON_HEADER = '{"format": "json", "version": 1}\n'


def _drop_none(data: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


@dataclass
class ExceptionRecord:
    id: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "message": self.message}


@dataclass
class Cause:
    exceptions: list[ExceptionRecord] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"exceptions": [exc.to_dict() for exc in self.exceptions]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Cause:
        return cls(
            exceptions=[
                ExceptionRecord(id=exc["id"], message=exc["message"])
                for exc in data.get("exceptions", [])
            ]
        )


@dataclass
class HttpRequest:
    method: str | None = None
    url: str | None = None
    traced: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        return _drop_none({"method": self.method, "url": self.url, "traced": self.traced})


@dataclass
class HttpResponse:
    status: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return _drop_none({"status": self.status})


@dataclass
class Http:
    request: HttpRequest | None = None
    response: HttpResponse | None = None

    def to_dict(self) -> dict[str, Any]:
        return _drop_none(
            {
                "request": self.request.to_dict() if self.request else None,
                "response": self.response.to_dict() if self.response else None,
            }
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Http:
        request = data.get("request")
        response = data.get("response")
        return cls(
            request=HttpRequest(**request) if request is not None else None,
            response=HttpResponse(**response) if response is not None else None,
        )


@dataclass
class Sql:
    sanitized_query: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _drop_none({"sanitized_query": self.sanitized_query})


@dataclass
class Segment:
    """
    One X-Ray segment or subsegment.

    Field order follows the order in which fields are written to JSON.
    """

    name: str
    id: str
    trace_id: str
    start_time: float
    parent_id: str | None = None
    end_time: float | None = None
    in_progress: bool | None = None
    type: str | None = None
    namespace: str | None = None
    user: str | None = None
    origin: str | None = None
    error: bool | None = None
    fault: bool | None = None
    throttle: bool | None = None
    annotations: dict[str, Any] | None = None
    precursor_ids: list[str] | None = None
    cause: Cause | None = None
    http: Http | None = None
    sql: Sql | None = None
    subsegments: list[Segment] | None = None

    @property
    def is_subsegment(self) -> bool:
        return self.type == SUBSEGMENT_TYPE

    def add_subsegment(self, subsegment: Segment) -> None:
        if self.subsegments is None:
            self.subsegments = []
        self.subsegments.append(subsegment)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-ready dict, omitting absent optional fields."""
        return _drop_none(
            {
                "name": self.name,
                "id": self.id,
                "trace_id": self.trace_id,
                "start_time": self.start_time,
                "parent_id": self.parent_id,
                "end_time": self.end_time,
                "in_progress": self.in_progress,
                "type": self.type,
                "namespace": self.namespace,
                "user": self.user,
                "origin": self.origin,
                "error": self.error,
                "fault": self.fault,
                "throttle": self.throttle,
                "annotations": dict(self.annotations) if self.annotations is not None else None,
                "precursor_ids": list(self.precursor_ids) if self.precursor_ids is not None else None,
                "cause": self.cause.to_dict() if self.cause else None,
                "http": self.http.to_dict() if self.http else None,
                "sql": self.sql.to_dict() if self.sql else None,
                "subsegments": (
                    [sub.to_dict() for sub in self.subsegments]
                    if self.subsegments is not None
                    else None
                ),
            }
        )

    def to_json(self) -> str:
        """
        Serialize to a JSON document.

        Raises:
            ValueError: If a value cannot be represented in JSON (e.g. NaN).
            TypeError: If a value is not JSON serializable.
        """
        return json.dumps(self.to_dict(), allow_nan=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Segment:
        cause = data.get("cause")
        http = data.get("http")
        sql = data.get("sql")
        subsegments = data.get("subsegments")
        return cls(
            name=data["name"],
            id=data["id"],
            trace_id=data["trace_id"],
            start_time=data["start_time"],
            parent_id=data.get("parent_id"),
            end_time=data.get("end_time"),
            in_progress=data.get("in_progress"),
            type=data.get("type"),
            namespace=data.get("namespace"),
            user=data.get("user"),
            origin=data.get("origin"),
            error=data.get("error"),
            fault=data.get("fault"),
            throttle=data.get("throttle"),
            annotations=data.get("annotations"),
            precursor_ids=data.get("precursor_ids"),
            cause=Cause.from_dict(cause) if cause is not None else None,
            http=Http.from_dict(http) if http is not None else None,
            sql=Sql(**sql) if sql is not None else None,
            subsegments=(
                [cls.from_dict(sub) for sub in subsegments] if subsegments is not None else None
            ),
        )

    @classmethod
    def from_json(cls, document: str) -> Segment:
        """Parse a serialized document, tolerating a leading daemon header."""
        if document.startswith(DAEMON_HEADER):
            document = document[len(DAEMON_HEADER):]
        return cls.from_dict(json.loads(document))
