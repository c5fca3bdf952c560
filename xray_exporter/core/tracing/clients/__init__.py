"""Backend clients for submitting segment documents to X-Ray."""

from .base import PutTraceSegmentsResult, UnprocessedTraceSegment, XRayClient
from .memory import InMemoryXRayClient
from .daemon import DaemonXRayClient, parse_daemon_address
from .aws import Boto3XRayClient

__all__ = [
    # Base
    "XRayClient",
    "PutTraceSegmentsResult",
    "UnprocessedTraceSegment",
    # Clients
    "InMemoryXRayClient",
    "DaemonXRayClient",
    "Boto3XRayClient",
    # Helpers
    "parse_daemon_address",
]
