"""Prometheus metrics for stopword resolution and term aggregation, bridged to OpenTelemetry."""

from __future__ import annotations

from contextlib import contextmanager
import time
from typing import TYPE_CHECKING, Any

from opentelemetry import metrics as otel_metrics
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest


if TYPE_CHECKING:
    from collections.abc import Generator


_meter_holder: dict[str, Any] = {"meter": None}


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


_STOPWORD_CACHE_LOOKUPS_PROM = Counter(
    "stopword_cache_lookups_total",
    "Stopper resolutions by cache outcome",
    ["result"],
)

_STOPWORD_LOAD_SECONDS_PROM = Histogram(
    "stopword_load_seconds",
    "Time spent reading and parsing a stopword list",
    ["language"],
    buckets=(0.0005, 0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.5),
)

_MATCH_SPY_PAYLOADS_PROM = Counter(
    "match_spy_payloads_total",
    "Term payloads decoded during aggregation",
    ["outcome"],
)

STOPWORD_CACHE_LOOKUPS = MetricBridge(
    _STOPWORD_CACHE_LOOKUPS_PROM,
    otel_name="stopword_cache_lookups_total",
    otel_description="Stopper resolutions by cache outcome",
    otel_kind="counter",
)

STOPWORD_LOAD_SECONDS = MetricBridge(
    _STOPWORD_LOAD_SECONDS_PROM,
    otel_name="stopword_load_seconds",
    otel_description="Time spent reading and parsing a stopword list",
    otel_kind="histogram",
)

MATCH_SPY_PAYLOADS = MetricBridge(
    _MATCH_SPY_PAYLOADS_PROM,
    otel_name="match_spy_payloads_total",
    otel_description="Term payloads decoded during aggregation",
    otel_kind="counter",
)


@contextmanager
def track_latency(histogram: MetricBridge, **labels: str) -> Generator[None, None, None]:
    """Observe the wall time of the wrapped block in seconds."""
    start = time.perf_counter()
    try:
        yield
    finally:
        histogram.labels(**labels).observe(time.perf_counter() - start)


def get_metrics() -> bytes:
    """Render the default Prometheus registry in text exposition format."""
    return generate_latest()


def get_metrics_content_type() -> str:
    return CONTENT_TYPE_LATEST
