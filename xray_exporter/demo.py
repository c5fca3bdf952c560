"""Sends a few sample spans through the X-Ray exporter.

Run: python -m xray_exporter.demo [--service-name NAME] [--daemon]
"""

from __future__ import annotations

import argparse
import time

from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.sampling import ALWAYS_ON

from .core.config import XRayExporterConfig
from .core.logger import configure_logger
from .core.xray_trace_exporter import XRayTraceExporter


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Export sample spans to AWS X-Ray")
    parser.add_argument("--service-name", default="xray-exporter-demo", help="Name of top-level segments")
    parser.add_argument("--daemon", action="store_true", help="Send to the local X-Ray daemon over UDP")
    parser.add_argument("--count", type=int, default=5, help="Number of sample spans")
    args = parser.parse_args(argv)

    configure_logger(log_level="debug", prefix="XRayDemo")

    # For demo purposes, we'll always sample
    provider = TracerProvider(sampler=ALWAYS_ON)
    trace.set_tracer_provider(provider)

    config = XRayExporterConfig.resolve(service_name=args.service_name, use_daemon=args.daemon)
    XRayTraceExporter.create_and_register(config=config, tracer_provider=provider)

    tracer = trace.get_tracer(__name__)
    for i in range(args.count):
        name = f"sample-{i}"
        with tracer.start_as_current_span(name) as span:
            span.add_event(f"This annotation is for {name}")
            time.sleep(0.2)

    # Flush queued spans before the handler goes away
    provider.force_flush()
    XRayTraceExporter.unregister()
    provider.shutdown()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
