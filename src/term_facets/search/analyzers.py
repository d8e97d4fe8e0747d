"""Apply stoppers to free text when preparing query or index terms.

A :class:`StopwordAnalyzer` splits text into words, lower-cases them and asks
a stopper which ones to drop. Kept terms remember their word position in the
original text, so phrase and proximity matching still sees the gap a stop
word left behind.
"""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import TYPE_CHECKING

from term_facets.search.stopwords import get_default_registry


if TYPE_CHECKING:
    from collections.abc import Iterator

    from term_facets.search.stopwords import Stopper, StopwordRegistry

WORD_PATTERN = re.compile(r"[\w']+")


@dataclass(frozen=True)
class AnalyzedTerm:
    text: str
    position: int
    stopped: bool = False


class StopwordAnalyzer:
    """Lower-cases words and marks the ones ``stopper`` reports as stop words.

    Without a stopper nothing is stopped.
    """

    def __init__(self, stopper: Stopper | None = None, *, pattern: re.Pattern[str] = WORD_PATTERN) -> None:
        self.stopper = stopper
        self.pattern = pattern

    def analyze(self, text: str) -> Iterator[AnalyzedTerm]:
        """Yield every word of ``text`` in order, stop words included but flagged."""
        for position, match in enumerate(self.pattern.finditer(text)):
            word = match.group(0).lower()
            yield AnalyzedTerm(word, position, self.stopper is not None and bool(self.stopper(word)))

    def terms(self, text: str) -> list[AnalyzedTerm]:
        """Return the kept terms with their original positions."""
        return [term for term in self.analyze(text) if not term.stopped]

    def stopped_words(self, text: str) -> list[str]:
        """Return the words dropped from ``text``, e.g. to tell a user what was ignored in their query."""
        return [term.text for term in self.analyze(text) if term.stopped]

    def __call__(self, text: str) -> list[str]:
        return [term.text for term in self.terms(text)]


def get_analyzer(language: str | None, registry: StopwordRegistry | None = None) -> StopwordAnalyzer:
    """Return an analyzer dropping the stop words of ``language``.

    ``None`` disables stop filtering. Languages resolve through ``registry``,
    defaulting to the process-shared registry.

    Raises:
        UnsupportedLanguageError: ``language`` has no stopword list
    """
    if language is None:
        return StopwordAnalyzer()
    return StopwordAnalyzer((registry or get_default_registry()).resolve(language))
