"""term-facets: stopword registry and facet term counting for search engines."""

from term_facets.config import Settings
from term_facets.search.match_spy import ArrayCountMatchSpy, ValueCountMatchSpy
from term_facets.search.models import MatchValue, Term
from term_facets.search.payloads import decode_terms, encode_terms
from term_facets.search.stopwords import (
    LanguageName,
    PrebuiltStopper,
    SimpleStopper,
    Stopper,
    StopperInput,
    StopwordRegistry,
    UnsupportedLanguageError,
    get_default_registry,
    stopper_for,
)


__version__ = "0.1.0"

__all__ = [
    "ArrayCountMatchSpy",
    "LanguageName",
    "MatchValue",
    "PrebuiltStopper",
    "Settings",
    "SimpleStopper",
    "Stopper",
    "StopperInput",
    "StopwordRegistry",
    "Term",
    "UnsupportedLanguageError",
    "ValueCountMatchSpy",
    "__version__",
    "decode_terms",
    "encode_terms",
    "get_default_registry",
    "stopper_for",
]
