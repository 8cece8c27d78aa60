"""
OpenTelemetry distributed tracing configuration.

Supports console export (development) and OTLP export (production).
"""

from typing import Any

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter


def setup_tracing(
    service_name: str,
    service_version: str = "0.1.0",
    otlp_endpoint: str | None = None,
    console_export: bool = False,
) -> TracerProvider:
    """
    Setup OpenTelemetry distributed tracing.

    Args:
        service_name: Name of the service
        service_version: Version of the service
        otlp_endpoint: OTLP collector endpoint (e.g., "http://localhost:4317")
        console_export: Whether to export traces to console (for development)

    Returns:
        Configured tracer provider
    """
    resource = Resource.create(
        {
            "service.name": service_name,
            "service.version": service_version,
            "service.namespace": "diagram-share",
        }
    )
    provider = TracerProvider(resource=resource)

    if console_export:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    if otlp_endpoint:
        provider.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True))
        )

    trace.set_tracer_provider(provider)
    return provider


def instrument_fastapi(app: Any, excluded_urls: str = "health,metrics") -> None:
    """
    Instrument FastAPI application with OpenTelemetry.

    Args:
        app: FastAPI application instance
        excluded_urls: Comma-separated URL patterns that are not traced
    """
    FastAPIInstrumentor.instrument_app(app, excluded_urls=excluded_urls)


def get_tracer(name: str) -> trace.Tracer:
    """Get a tracer instance (name is typically __name__)."""
    return trace.get_tracer(name)
