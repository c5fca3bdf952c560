"""Exceptions raised by the X-Ray exporter."""

from __future__ import annotations


class AlreadyRegisteredError(RuntimeError):
    """Raised when an X-Ray exporter is registered while another one is installed."""

    def __init__(self, message: str = "XRay exporter is already registered.") -> None:
        super().__init__(message)


class NotRegisteredError(RuntimeError):
    """Raised when unregistering while no X-Ray exporter is installed."""

    def __init__(self, message: str = "XRay exporter is not registered.") -> None:
        super().__init__(message)
