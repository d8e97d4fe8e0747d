"""Observability module for logging, metrics and tracing."""

from __future__ import annotations

from typing import TYPE_CHECKING

from term_facets.observability.logging import JsonFormatter, configure_logging
from term_facets.observability.metrics import (
    MATCH_SPY_PAYLOADS,
    STOPWORD_CACHE_LOOKUPS,
    STOPWORD_LOAD_SECONDS,
    get_metrics,
    get_metrics_content_type,
    track_latency,
)
from term_facets.observability.tracing import create_span, get_tracer, init_tracing


if TYPE_CHECKING:
    from term_facets.config import Settings


def configure_observability(settings: Settings) -> None:
    """Apply logging and optional tracing from settings."""
    configure_logging(settings.log_level, settings.log_json)
    if settings.tracing_enabled:
        init_tracing(settings.service_name)


__all__ = [
    "MATCH_SPY_PAYLOADS",
    "STOPWORD_CACHE_LOOKUPS",
    "STOPWORD_LOAD_SECONDS",
    "JsonFormatter",
    "configure_logging",
    "configure_observability",
    "create_span",
    "get_metrics",
    "get_metrics_content_type",
    "get_tracer",
    "init_tracing",
    "track_latency",
]
