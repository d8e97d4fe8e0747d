"""JSON log lines for stopword loads and match spy passes."""

from __future__ import annotations

from datetime import datetime, timezone
import logging
import sys
from typing import Any

from opentelemetry import trace
import orjson


class JsonFormatter(logging.Formatter):
    """Render each record as one JSON object.

    Records logged inside a span carry its ``trace_id`` and ``span_id``.
    The search fields below are lifted out of ``extra=`` onto the top level
    so that, for example, every line about one language can be filtered on
    ``language``.
    """

    SEARCH_FIELDS = ("language", "word_count", "scope", "values_scanned", "distinct_terms")

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            entry["trace_id"] = format(span_context.trace_id, "032x")
            entry["span_id"] = format(span_context.span_id, "016x")

        for name in self.SEARCH_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                entry[name] = value

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return orjson.dumps(entry, default=str).decode("utf-8")


def configure_logging(
    level: str = "INFO",
    json_output: bool = True,
    *,
    logger_levels: dict[str, str] | None = None,
) -> None:
    """Route the root logger to stdout, replacing any handlers already installed.

    Args:
        level: Root log level name, case-insensitive
        json_output: Use :class:`JsonFormatter` instead of plain text lines
        logger_levels: Level overrides keyed by logger name, for example
            ``{"term_facets.search.match_spy": "debug"}``
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        JsonFormatter() if json_output else logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level.upper())

    for name, logger_level in (logger_levels or {}).items():
        logging.getLogger(name).setLevel(logger_level.upper())
