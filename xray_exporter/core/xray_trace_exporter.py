"""Process-wide registration of the X-Ray exporter.

Example of usage::

    from xray_exporter import XRayTraceExporter

    XRayTraceExporter.create_and_register("my-service")
    ...  # Do work.
    XRayTraceExporter.unregister()
"""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import TYPE_CHECKING

from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider

from .config import XRayExporterConfig
from .errors import AlreadyRegisteredError, NotRegisteredError
from .tracing.clients import Boto3XRayClient, DaemonXRayClient
from .tracing.exporter_handler import XRayExporterHandler, create_diagnostic_tracer_provider
from .tracing.span_exporter import SpanExporterRegistry

if TYPE_CHECKING:
    from .tracing.clients.base import XRayClient
    from .tracing.span_exporter import Handler

logger = logging.getLogger(__name__)

# Kept for compatibility with deployments that look the handler up by name
REGISTER_NAME = "info.tdoc.exporter.trace.xray.XRayTraceExporter"


class XRayTraceExporter:
    """
    Installs at most one X-Ray export handler per process.

    All reads and writes of the installed handler happen under one lock.
    """

    _handler: Handler | None = None
    _lock = threading.Lock()

    def __init__(self) -> None:
        raise TypeError("XRayTraceExporter is not instantiable; use its classmethods")

    @classmethod
    def create_and_register(
        cls,
        service_name: str | None = None,
        client: XRayClient | None = None,
        config: XRayExporterConfig | None = None,
        tracer_provider: TracerProvider | None = None,
    ) -> XRayExporterHandler:
        """
        Create the X-Ray exporter and register it with the tracing runtime.

        Args:
            service_name: Name of top-level segments; overrides ``config``
            client: Backend client (built from the config and the ambient AWS
                environment if None)
            config: Exporter settings (resolved from env vars and
                .xray/config.yaml if None)
            tracer_provider: Provider whose spans are exported (the global
                provider if None, when it is an SDK provider)

        Returns:
            The registered handler

        Raises:
            AlreadyRegisteredError: If an X-Ray exporter is already registered
        """
        with cls._lock:
            if cls._handler is not None:
                raise AlreadyRegisteredError()

            if config is None:
                config = XRayExporterConfig.resolve(service_name=service_name)
            elif service_name is not None:
                config = replace(config, service_name=service_name)

            if client is None:
                client = _create_default_client(config)

            diagnostic_provider = create_diagnostic_tracer_provider(config.diagnostic_sampling_rate)
            handler = XRayExporterHandler(
                client,
                service_name=config.service_name,
                use_daemon=config.use_daemon,
                origin=config.origin,
                diagnostic_provider=diagnostic_provider,
            )

            span_exporter = SpanExporterRegistry.get_instance()
            provider = tracer_provider or trace.get_tracer_provider()
            if isinstance(provider, TracerProvider):
                span_exporter.attach(provider)
            else:
                logger.warning(
                    "Global tracer provider is not an SDK TracerProvider; "
                    "attach SpanExporterRegistry.get_instance() to your provider to export spans"
                )
            span_exporter.attach(diagnostic_provider)

            cls.register_handler(span_exporter, handler)
            cls._handler = handler

        logger.info(f"X-Ray exporter registered via {client.name}")
        return handler

    @classmethod
    def unregister(cls) -> None:
        """
        Unregister the X-Ray exporter and shut its client and diagnostic
        tracer provider down.

        Raises:
            NotRegisteredError: If no X-Ray exporter is registered
        """
        with cls._lock:
            if cls._handler is None:
                raise NotRegisteredError()

            cls.unregister_handler(SpanExporterRegistry.get_instance())
            handler = cls._handler
            cls._handler = None

        handler.shutdown()
        logger.info("X-Ray exporter unregistered")

    @classmethod
    def is_registered(cls) -> bool:
        with cls._lock:
            return cls._handler is not None

    @staticmethod
    def register_handler(span_exporter: SpanExporterRegistry, handler: Handler) -> None:
        """Register ``handler`` with ``span_exporter`` under the X-Ray exporter name."""
        span_exporter.register_handler(REGISTER_NAME, handler)

    @staticmethod
    def unregister_handler(span_exporter: SpanExporterRegistry) -> None:
        """Remove the X-Ray exporter's handler from ``span_exporter``."""
        span_exporter.unregister_handler(REGISTER_NAME)


def _create_default_client(config: XRayExporterConfig) -> XRayClient:
    if config.use_daemon:
        return DaemonXRayClient(config.daemon_address)
    return Boto3XRayClient(region=config.region, endpoint_url=config.endpoint_url)
