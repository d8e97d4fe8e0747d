"""Match spies that count facet terms across matching documents.

A value-count spy sees one serialized payload per matching document and
reports each distinct payload with the number of documents that carried it.
:class:`ArrayCountMatchSpy` sits on top of such a spy when the payload is a
list of terms and turns those per-payload counts into per-term counts.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Iterator
import logging
from typing import Protocol

from term_facets.observability.metrics import MATCH_SPY_PAYLOADS
from term_facets.observability.tracing import create_span
from term_facets.search.models import MatchValue, Term
from term_facets.search.payloads import decode_terms


logger = logging.getLogger(__name__)


class CountedValue(Protocol):
    """Item yielded by a value source: a payload and its document count."""

    term: str
    termfreq: int


class ValueSource(Protocol):
    """Iteration protocol of a search engine's value-count spy."""

    def values(self) -> Iterable[CountedValue]:  # pragma: no cover - interface definition
        ...

    def top_values(self, max_values: int) -> Iterable[CountedValue]:  # pragma: no cover - interface definition
        ...


class ValueCountMatchSpy:
    """In-memory value-count spy.

    Call it (or :meth:`observe`) once per matching document with the payload
    stored on that document. Owned by a single query and not thread-safe.
    """

    def __init__(self, payloads: Iterable[str] | None = None) -> None:
        self._counts: Counter[str] = Counter()
        self.document_count = 0
        for payload in payloads or ():
            self.observe(payload)

    def observe(self, payload: str) -> None:
        self._counts[payload] += 1
        self.document_count += 1

    __call__ = observe

    def values(self) -> Iterator[MatchValue]:
        """Yield every distinct payload, ordered by payload string."""
        for payload in sorted(self._counts):
            yield MatchValue(term=payload, termfreq=self._counts[payload])

    def top_values(self, max_values: int) -> Iterator[MatchValue]:
        """Yield the ``max_values`` most frequent payloads, most frequent first."""
        if max_values <= 0:
            return
        ranked = sorted(self._counts.items(), key=lambda item: (-item[1], item[0]))
        for payload, count in ranked[:max_values]:
            yield MatchValue(term=payload, termfreq=count)


class ArrayCountMatchSpy:
    """Counts individual terms inside list-valued payloads.

    The first payload that introduces a term seeds the term's frequency with
    that payload's document count; each later payload containing the term
    adds one.
    """

    def __init__(self, source: ValueSource) -> None:
        self.source = source

    def values(self) -> list[Term]:
        """Aggregate terms over every value reported by the source."""
        return self._aggregate(self.source.values(), scope="all")

    def top_values(self, max_values: int) -> list[Term]:
        """Aggregate terms over the source's ``max_values`` top values only."""
        return self._aggregate(self.source.top_values(max_values), scope="top")

    def _aggregate(self, items: Iterable[CountedValue], *, scope: str) -> list[Term]:
        terms: dict[str, Term] = {}
        scanned = 0
        with create_span("match_spy.aggregate", attributes={"match_spy.scope": scope}) as span:
            for item in items:
                scanned += 1
                decoded = decode_terms(item.term)
                MATCH_SPY_PAYLOADS.labels(outcome="terms" if decoded else "empty").inc()
                for text in decoded:
                    existing = terms.get(text)
                    if existing is not None:
                        existing.termfreq += 1
                    else:
                        terms[text] = Term(term=text, termfreq=item.termfreq)
            span.set_attribute("match_spy.values_scanned", scanned)
            span.set_attribute("match_spy.distinct_terms", len(terms))

        logger.debug(
            "Aggregated %d distinct terms from %d values (%s)",
            len(terms),
            scanned,
            scope,
            extra={"scope": scope, "values_scanned": scanned, "distinct_terms": len(terms)},
        )
        return list(terms.values())
