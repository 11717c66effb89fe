"""
Observability package: OpenTelemetry tracing for provider calls.
"""

from memory_ai.observability.tracing import (
    get_current_trace_id,
    get_tracer,
    inject_trace_context,
    provider_span,
    setup_tracing,
)

__all__ = [
    "setup_tracing",
    "get_tracer",
    "get_current_trace_id",
    "inject_trace_context",
    "provider_span",
]
