"""Observability module for OpenTelemetry-aligned tracing, metrics, and logging."""

from searchable_records.observability.context import get_trace_context, set_trace_context, trace_context
from searchable_records.observability.logging import JsonFormatter, configure_logging, configure_logging_from_settings
from searchable_records.observability.metrics import (
    EXTRACTION_LATENCY,
    EXTRACTIONS_TOTAL,
    KEYWORDIZE_TOTAL,
    SEARCH_FILTERS_TOTAL,
    get_metrics,
    init_metrics,
    track_latency,
)
from searchable_records.observability.tracing import create_span, get_tracer, init_tracing


__all__ = [
    "EXTRACTIONS_TOTAL",
    "EXTRACTION_LATENCY",
    "KEYWORDIZE_TOTAL",
    "SEARCH_FILTERS_TOTAL",
    "JsonFormatter",
    "configure_logging",
    "configure_logging_from_settings",
    "create_span",
    "get_metrics",
    "get_trace_context",
    "get_tracer",
    "init_metrics",
    "init_tracing",
    "set_trace_context",
    "trace_context",
    "track_latency",
]
