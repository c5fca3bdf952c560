"""Pytest configuration and fixtures for X-Ray exporter tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from typing import TYPE_CHECKING

import pytest
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.sdk.trace.sampling import ALWAYS_ON

if TYPE_CHECKING:
    from xray_exporter.core.tracing.clients import InMemoryXRayClient


@pytest.fixture
def in_memory_client() -> InMemoryXRayClient:
    """Create a fresh InMemoryXRayClient for testing."""
    from xray_exporter.core.tracing.clients import InMemoryXRayClient

    return InMemoryXRayClient()


@pytest.fixture
def diagnostic_spans() -> InMemorySpanExporter:
    """Exporter collecting every span ended on the ``diagnostic_provider``."""
    return InMemorySpanExporter()


@pytest.fixture
def diagnostic_provider(diagnostic_spans: InMemorySpanExporter) -> Generator[TracerProvider, None, None]:
    """Always-sampling provider for observing the exporter's own spans."""
    provider = TracerProvider(sampler=ALWAYS_ON)
    provider.add_span_processor(SimpleSpanProcessor(diagnostic_spans))
    yield provider
    provider.shutdown()


@pytest.fixture
def reset_registration() -> Generator[None, None, None]:
    """Make sure no X-Ray exporter is registered before and after a test."""
    from xray_exporter.core.xray_trace_exporter import XRayTraceExporter

    def _reset() -> None:
        if XRayTraceExporter.is_registered():
            XRayTraceExporter.unregister()

    _reset()
    yield
    _reset()


@pytest.fixture
def restore_package_logger() -> Generator[None, None, None]:
    """Undo configure_logger() changes to the package logger."""
    from xray_exporter.core.logger import PACKAGE_LOGGER_NAME, set_log_level

    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    handlers = list(package_logger.handlers)
    propagate = package_logger.propagate
    level = package_logger.level
    yield
    package_logger.handlers = handlers
    package_logger.propagate = propagate
    set_log_level("info")
    package_logger.setLevel(level)
