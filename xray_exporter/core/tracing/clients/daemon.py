"""X-Ray client that forwards documents to the local X-Ray daemon over UDP."""

from __future__ import annotations

import logging
import socket
import threading
from typing import TYPE_CHECKING

from ...config import DEFAULT_DAEMON_ADDRESS
from .base import PutTraceSegmentsResult, XRayClient

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)


def parse_daemon_address(address: str) -> tuple[str, int]:
    """
    Parse ``host:port`` into a socket address.

    Raises:
        ValueError: If the address has no port or the port is not a number
    """
    host, sep, port = address.strip().rpartition(":")
    if not sep or not host:
        raise ValueError(f"Invalid X-Ray daemon address: {address!r}")
    try:
        return host, int(port)
    except ValueError as e:
        raise ValueError(f"Invalid X-Ray daemon port in address: {address!r}") from e


class DaemonXRayClient(XRayClient):
    """
    Sends each document as one UDP datagram.

    Documents must already carry the daemon header line. The daemon does not
    acknowledge datagrams, so results never list unprocessed segments.
    """

    def __init__(self, address: str = DEFAULT_DAEMON_ADDRESS) -> None:
        self._address = parse_daemon_address(address)
        self._socket: socket.socket | None = None
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        host, port = self._address
        return f"DaemonXRayClient(address={host}:{port})"

    @property
    def name(self) -> str:
        return "xray-daemon"

    def _get_socket(self) -> socket.socket:
        if self._socket is None:
            self._socket = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        return self._socket

    def put_trace_segments(self, documents: Sequence[str]) -> PutTraceSegmentsResult:
        with self._lock:
            sock = self._get_socket()
            for document in documents:
                sock.sendto(document.encode("utf-8"), self._address)

        logger.debug(f"Sent {len(documents)} documents to X-Ray daemon")
        return PutTraceSegmentsResult()

    def shutdown(self) -> None:
        with self._lock:
            if self._socket is not None:
                self._socket.close()
                self._socket = None
