"""
OpenTelemetry tracing for provider calls.

Each outbound provider request runs inside a CLIENT span and carries W3C
trace context headers, so a memory-creation workflow that is itself traced
sees its transcription, extraction and embedding calls as child spans.

Without setup_tracing() the global no-op tracer provider is used and spans
cost nothing.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Optional

from opentelemetry import trace
from opentelemetry.propagate import inject
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.trace import Span, SpanKind, Status, StatusCode, Tracer

_tracer_provider: Optional[TracerProvider] = None

TRACER_NAME = "memory_ai.providers"


def setup_tracing(
    service_name: str = "memory-ai-orchestrator",
    otlp_endpoint: Optional[str] = None,
) -> TracerProvider:
    """
    Install an OpenTelemetry TracerProvider.

    Args:
        service_name: Name of the service for resource identification
        otlp_endpoint: Optional OTLP exporter endpoint (e.g., http://localhost:4317)

    Returns:
        Configured TracerProvider
    """
    global _tracer_provider

    resource = Resource.create({SERVICE_NAME: service_name})
    provider = TracerProvider(resource=resource)

    if otlp_endpoint:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (
            OTLPSpanExporter,
        )

        exporter = OTLPSpanExporter(endpoint=otlp_endpoint)
    else:
        exporter = ConsoleSpanExporter()

    provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(provider)
    _tracer_provider = provider

    return provider


def get_tracer(name: str = TRACER_NAME) -> Tracer:
    """Get a named tracer instance."""
    return trace.get_tracer(name)


def get_current_trace_id() -> Optional[str]:
    """Get the current trace ID as hex string."""
    span_context = trace.get_current_span().get_span_context()

    if span_context.trace_id == 0:
        return None

    return format(span_context.trace_id, "032x")


def inject_trace_context(headers: Optional[dict[str, str]] = None) -> dict[str, str]:
    """Inject trace context into headers for outbound requests."""
    carrier = headers if headers is not None else {}
    inject(carrier)
    return carrier


@contextmanager
def provider_span(
    provider: str,
    operation: str,
    model: str,
    **attributes: Any,
) -> Iterator[Span]:
    """
    Run one provider call inside a CLIENT span.

    Exceptions are recorded on the span, marked as errors, and re-raised.
    """
    tracer = get_tracer()
    with tracer.start_as_current_span(
        f"provider.{operation}",
        kind=SpanKind.CLIENT,
        record_exception=False,
        set_status_on_exception=False,
    ) as span:
        span.set_attribute("ai.provider", provider)
        span.set_attribute("ai.operation", operation)
        span.set_attribute("ai.model", model)
        for key, value in attributes.items():
            span.set_attribute(f"ai.{key}", value)

        try:
            yield span
        except Exception as e:
            span.record_exception(e)
            span.set_status(Status(StatusCode.ERROR, str(e)))
            raise
