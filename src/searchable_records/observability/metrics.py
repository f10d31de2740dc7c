"""Prometheus metrics for keyword extraction and search, bridged to OpenTelemetry."""

from __future__ import annotations

from contextlib import contextmanager
import time
from typing import TYPE_CHECKING, Any

from opentelemetry import metrics as otel_metrics
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.resources import Resource
from prometheus_client import Counter, Histogram, generate_latest


if TYPE_CHECKING:
    from collections.abc import Generator


_meter_holder: dict[str, Any] = {"meter": None, "provider": None}


def init_metrics(
    service_name: str = "searchable-records",
    resource_attributes: dict[str, str] | None = None,
) -> MeterProvider:
    """Initialize OpenTelemetry metrics."""
    provider = _meter_holder.get("provider")
    if isinstance(provider, MeterProvider):
        return provider

    attributes = {"service.name": service_name}
    if resource_attributes:
        attributes.update(resource_attributes)
    resource = Resource.create(attributes)
    provider = MeterProvider(resource=resource)
    otel_metrics.set_meter_provider(provider)
    _meter_holder["provider"] = provider
    _meter_holder["meter"] = otel_metrics.get_meter(__name__)
    return provider


def _get_meter():
    meter = _meter_holder.get("meter")
    if meter is None:
        meter = otel_metrics.get_meter(__name__)
        _meter_holder["meter"] = meter
    return meter


class _BoundMetric:
    def __init__(self, wrapper: MetricBridge, labels: dict[str, str]) -> None:
        self._wrapper = wrapper
        self._labels = labels

    def inc(self, amount: float = 1.0) -> None:
        self._wrapper.inc(self._labels, amount)

    def observe(self, value: float) -> None:
        self._wrapper.observe(self._labels, value)


class MetricBridge:
    """Bridge Prometheus metrics to OTel instruments."""

    def __init__(
        self,
        prom_metric: Counter | Histogram,
        *,
        otel_name: str,
        otel_description: str,
        otel_kind: str,
    ) -> None:
        self._prom_metric = prom_metric
        self._otel_name = otel_name
        self._otel_description = otel_description
        self._otel_kind = otel_kind
        self._otel_instrument = None

    def labels(self, **labels: str) -> _BoundMetric:
        return _BoundMetric(self, labels)

    def _ensure_otel_instrument(self):
        if self._otel_instrument is not None:
            return self._otel_instrument
        meter = _get_meter()
        if self._otel_kind == "counter":
            self._otel_instrument = meter.create_counter(self._otel_name, description=self._otel_description)
        elif self._otel_kind == "histogram":
            self._otel_instrument = meter.create_histogram(self._otel_name, description=self._otel_description)
        else:
            raise ValueError(f"Unknown metric kind: {self._otel_kind}")
        return self._otel_instrument

    def inc(self, labels: dict[str, str], amount: float) -> None:
        self._prom_metric.labels(**labels).inc(amount)
        self._ensure_otel_instrument().add(amount, labels)

    def observe(self, labels: dict[str, str], value: float) -> None:
        self._prom_metric.labels(**labels).observe(value)
        self._ensure_otel_instrument().record(value, labels)


_EXTRACTIONS_TOTAL_PROM = Counter(
    "searchable_extractions_total",
    "Keyword extraction calls",
    ["extractor", "status"],
)

_EXTRACTION_LATENCY_PROM = Histogram(
    "searchable_extraction_latency_seconds",
    "Keyword extraction latency per field",
    ["extractor"],
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
)

_KEYWORDIZE_TOTAL_PROM = Counter(
    "searchable_keywordize_total",
    "Keywordize operations",
    ["status"],
)

_SEARCH_FILTERS_TOTAL_PROM = Counter(
    "searchable_search_filters_total",
    "Search filters built",
    ["scored"],
)

EXTRACTIONS_TOTAL = MetricBridge(
    _EXTRACTIONS_TOTAL_PROM,
    otel_name="searchable_extractions_total",
    otel_description="Keyword extraction calls",
    otel_kind="counter",
)

EXTRACTION_LATENCY = MetricBridge(
    _EXTRACTION_LATENCY_PROM,
    otel_name="searchable_extraction_latency_seconds",
    otel_description="Keyword extraction latency per field",
    otel_kind="histogram",
)

KEYWORDIZE_TOTAL = MetricBridge(
    _KEYWORDIZE_TOTAL_PROM,
    otel_name="searchable_keywordize_total",
    otel_description="Keywordize operations",
    otel_kind="counter",
)

SEARCH_FILTERS_TOTAL = MetricBridge(
    _SEARCH_FILTERS_TOTAL_PROM,
    otel_name="searchable_search_filters_total",
    otel_description="Search filters built",
    otel_kind="counter",
)


@contextmanager
def track_latency(histogram: MetricBridge, **labels: str) -> Generator[None, None, None]:
    """Context manager to track operation latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        histogram.labels(**labels).observe(time.perf_counter() - start)


def get_metrics() -> bytes:
    """Generate Prometheus metrics output."""
    return generate_latest()

