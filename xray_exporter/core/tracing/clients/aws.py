"""X-Ray client that calls the PutTraceSegments API through boto3."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import boto3
from botocore.config import Config

from .base import PutTraceSegmentsResult, UnprocessedTraceSegment, XRayClient

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)


class Boto3XRayClient(XRayClient):
    """
    Sends segment documents with ``xray:PutTraceSegments``.

    Credentials and region come from the ambient AWS environment unless given.
    Retries are left to botocore's retry configuration.
    """

    def __init__(
        self,
        region: str | None = None,
        endpoint_url: str | None = None,
        client: Any = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            region: AWS region (defaults to the ambient configuration)
            endpoint_url: Endpoint override, e.g. for a local emulator
            client: Preconfigured boto3 X-Ray client
        """
        self._region = region
        self._endpoint_url = endpoint_url
        self._client = client

    def __repr__(self) -> str:
        return f"Boto3XRayClient(region={self._region}, endpoint_url={self._endpoint_url})"

    @property
    def name(self) -> str:
        return "xray-api"

    def _get_client(self) -> Any:
        """Get or create the boto3 client."""
        if self._client is None:
            config = Config(
                retries={"max_attempts": 3, "mode": "standard"},
                connect_timeout=5,
                read_timeout=30,
            )
            self._client = boto3.client(
                "xray",
                region_name=self._region,
                endpoint_url=self._endpoint_url,
                config=config,
            )
        return self._client

    def put_trace_segments(self, documents: Sequence[str]) -> PutTraceSegmentsResult:
        response = self._get_client().put_trace_segments(TraceSegmentDocuments=list(documents))

        unprocessed = [
            UnprocessedTraceSegment(
                id=item.get("Id"),
                error_code=item.get("ErrorCode"),
                message=item.get("Message"),
            )
            for item in response.get("UnprocessedTraceSegments") or []
        ]
        logger.debug(f"PutTraceSegments accepted {len(documents) - len(unprocessed)} of {len(documents)} documents")
        return PutTraceSegmentsResult(unprocessed=unprocessed)
