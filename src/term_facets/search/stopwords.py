"""Per-language stopword lists and the registry that caches stoppers built from them.

Each supported language ships as ``<language>.txt`` in the stopword data
directory. The file format follows the Snowball lists: one word per line,
optionally followed by an annotation, ``|`` starting a comment line, and blank
or indented lines ignored.

The registry resolves a language name to a :class:`SimpleStopper` exactly
once per language and hands the same object to every later caller.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
import logging
from pathlib import Path
import threading
from typing import Protocol, runtime_checkable

from term_facets.config import DEFAULT_STOPWORDS_DIR, Settings
from term_facets.observability.metrics import STOPWORD_CACHE_LOOKUPS, STOPWORD_LOAD_SECONDS, track_latency
from term_facets.observability.tracing import create_span


logger = logging.getLogger(__name__)

_COMMENT_PREFIX = "|"


class UnsupportedLanguageError(LookupError):
    """Raised when no stopword list exists for a language."""

    def __init__(self, language: str, path: Path | None = None) -> None:
        self.language = language
        self.path = path
        detail = f" (expected {path})" if path is not None else ""
        super().__init__(f"No stopword list for language '{language}'{detail}")


@runtime_checkable
class Stopper(Protocol):
    """Anything that answers whether a term is a stop word."""

    def __call__(self, term: str) -> bool:  # pragma: no cover - interface definition
        ...


@dataclass(frozen=True)
class SimpleStopper:
    """Immutable stopper backed by a set of lower-cased words."""

    words: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_words(cls, words: Iterable[str]) -> SimpleStopper:
        return cls(frozenset(words))

    def __call__(self, term: str) -> bool:
        return term in self.words

    def __contains__(self, term: object) -> bool:
        return term in self.words

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.words))

    def __len__(self) -> int:
        return len(self.words)


@dataclass(frozen=True)
class PrebuiltStopper:
    """Caller-supplied stopper returned as is."""

    stopper: Stopper


@dataclass(frozen=True)
class LanguageName:
    """Language whose stopper is loaded from the data directory."""

    name: str


StopperInput = PrebuiltStopper | LanguageName


def as_stopper_input(value: object) -> StopperInput:
    """Tag a raw ``resolve`` argument as a prebuilt stopper or a language name."""
    if isinstance(value, (PrebuiltStopper, LanguageName)):
        return value
    if not isinstance(value, str) and isinstance(value, Stopper):
        return PrebuiltStopper(value)
    return LanguageName(str(value))


def normalize_language(lang: object) -> str:
    """Return the cache and file key for a language name: lower-cased, surrounding whitespace removed."""
    return str(lang).lower().strip()


def parse_stopword_line(line: str) -> str | None:
    """Return the stop word carried by one line of a stopword list, if any."""
    if not line or line[0].isspace() or line.startswith(_COMMENT_PREFIX):
        return None
    return line.split(maxsplit=1)[0].lower().strip()


class StopwordRegistry:
    """Resolves languages to stoppers, caching each one for the registry's lifetime.

    Builds are serialized per language: the first caller for a language reads
    the file while later callers for the same language wait and then receive
    the cached stopper. Different languages load independently.
    """

    def __init__(self, data_dir: Path | None = None, *, extension: str = ".txt") -> None:
        self.data_dir = Path(data_dir) if data_dir is not None else DEFAULT_STOPWORDS_DIR
        self.extension = extension
        self._stoppers: dict[str, SimpleStopper] = {}
        self._language_locks: dict[str, threading.Lock] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> StopwordRegistry:
        return cls(settings.stopwords_dir, extension=settings.stopwords_extension)

    def resolve(self, lang_or_stopper: object) -> Stopper:
        """Return the stopper for a language, or a prebuilt stopper unchanged.

        Args:
            lang_or_stopper: Language name, prebuilt stopper, or a tagged
                :data:`StopperInput`

        Returns:
            The prebuilt stopper itself, or the cached :class:`SimpleStopper`
            for the normalized language name

        Raises:
            UnsupportedLanguageError: No stopword list exists for the language
        """
        tagged = as_stopper_input(lang_or_stopper)
        if isinstance(tagged, PrebuiltStopper):
            STOPWORD_CACHE_LOOKUPS.labels(result="passthrough").inc()
            return tagged.stopper
        return self._resolve_language(normalize_language(tagged.name))

    def _resolve_language(self, lang: str) -> SimpleStopper:
        stopper = self._stoppers.get(lang)
        if stopper is not None:
            STOPWORD_CACHE_LOOKUPS.labels(result="hit").inc()
            return stopper

        while True:
            lock = self._get_or_create_lock(lang)
            with lock:
                if not self._is_current_lock(lang, lock):
                    # Released by the build we waited on; queue on the current one
                    continue
                try:
                    stopper = self._stoppers.get(lang)
                    if stopper is not None:
                        STOPWORD_CACHE_LOOKUPS.labels(result="hit").inc()
                        return stopper

                    STOPWORD_CACHE_LOOKUPS.labels(result="miss").inc()
                    stopper = SimpleStopper.from_words(self.stop_words_for(lang))
                    with self._lock:
                        self._stoppers[lang] = stopper
                    logger.info(
                        "Loaded %d stop words for language '%s'",
                        len(stopper),
                        lang,
                        extra={"language": lang, "word_count": len(stopper)},
                    )
                    return stopper
                finally:
                    self._release_lock(lang, lock)

    def _get_or_create_lock(self, lang: str) -> threading.Lock:
        with self._lock:
            lock = self._language_locks.get(lang)
            if lock is None:
                lock = threading.Lock()
                self._language_locks[lang] = lock
            return lock

    def _is_current_lock(self, lang: str, lock: threading.Lock) -> bool:
        with self._lock:
            return self._language_locks.get(lang) is lock

    def _release_lock(self, lang: str, lock: threading.Lock) -> None:
        with self._lock:
            if self._language_locks.get(lang) is lock:
                del self._language_locks[lang]

    def stop_words_filename(self, lang: object) -> Path:
        """Return the path of the stopword list for ``lang`` without touching the filesystem."""
        return self.data_dir / f"{normalize_language(lang)}{self.extension}"

    def stop_words_for(self, lang: object) -> list[str]:
        """Read and parse the stopword list for ``lang``.

        Words keep file order and duplicates are not removed. Lines that are
        not valid UTF-8 are skipped; a read error part way through ends the
        list at the last good line.

        Raises:
            UnsupportedLanguageError: The language has no stopword list
        """
        normalized = normalize_language(lang)
        if not normalized or "/" in normalized or "\\" in normalized or normalized in (".", ".."):
            raise UnsupportedLanguageError(str(lang))

        path = self.stop_words_filename(normalized)
        if not path.is_file():
            raise UnsupportedLanguageError(normalized, path)

        words: list[str] = []
        skipped = 0
        with (
            create_span("stopwords.load", attributes={"stopwords.language": normalized}) as span,
            track_latency(STOPWORD_LOAD_SECONDS, language=normalized),
        ):
            try:
                with path.open("rb") as handle:
                    for lineno, raw in enumerate(handle, start=1):
                        try:
                            line = raw.decode("utf-8")
                        except UnicodeDecodeError as exc:
                            skipped += 1
                            logger.warning(
                                "Skipping undecodable line %d of %s: %s",
                                lineno,
                                path,
                                exc,
                                extra={"language": normalized},
                            )
                            continue
                        word = parse_stopword_line(line)
                        if word:
                            words.append(word)
            except OSError as exc:
                logger.warning(
                    "Stopped reading %s after %d words: %s",
                    path,
                    len(words),
                    exc,
                    extra={"language": normalized},
                )
            span.set_attribute("stopwords.word_count", len(words))
            span.set_attribute("stopwords.skipped_lines", skipped)
        return words

    def available_languages(self) -> list[str]:
        """Return the languages that have a stopword list in the data directory."""
        if not self.data_dir.is_dir():
            return []
        return sorted(
            path.name[: -len(self.extension)]
            for path in self.data_dir.iterdir()
            if path.is_file() and path.name.endswith(self.extension)
        )

    def cached_languages(self) -> list[str]:
        """Return the languages whose stoppers have already been built."""
        with self._lock:
            return sorted(self._stoppers)


_default_holder: dict[str, StopwordRegistry | None] = {"registry": None}
_default_lock = threading.Lock()


def get_default_registry() -> StopwordRegistry:
    """Return the process-shared registry built from :class:`~term_facets.config.Settings`."""
    with _default_lock:
        registry = _default_holder["registry"]
        if registry is None:
            registry = StopwordRegistry.from_settings(Settings())
            _default_holder["registry"] = registry
        return registry


def stopper_for(lang_or_stopper: object) -> Stopper:
    """Resolve through the process-shared registry."""
    return get_default_registry().resolve(lang_or_stopper)
