"""Keyword extraction strategies and the adapter that runs them.

Extraction is pluggable: ``DefaultTermExtractor`` runs YAKE, a statistical
keyword extractor, while ``CustomExtractor`` wraps any caller-supplied
function. ``ExtractorAdapter`` gives both the same asynchronous contract and
normalizes whatever they return.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable, Mapping
from functools import lru_cache
import inspect
import logging
import time
from typing import Any, Protocol, runtime_checkable

import yake

from searchable_records.domain.errors import ExtractionError, ExtractionTimeoutError
from searchable_records.domain.keywords import KeywordSet
from searchable_records.domain.options import ExtractFunction, ExtractionOptions
from searchable_records.observability.metrics import EXTRACTION_LATENCY, EXTRACTIONS_TOTAL
from searchable_records.observability.tracing import create_span
from searchable_records.services.keyword_service import normalize_keywords


logger = logging.getLogger(__name__)

# Full-text search language names mapped to the stopword lists YAKE ships
LANGUAGE_CODES: dict[str, str] = {
    "danish": "da",
    "dutch": "nl",
    "english": "en",
    "finnish": "fi",
    "french": "fr",
    "german": "de",
    "hungarian": "hu",
    "italian": "it",
    "norwegian": "no",
    "portuguese": "pt",
    "romanian": "ro",
    "russian": "ru",
    "spanish": "es",
    "swedish": "sv",
    "turkish": "tr",
}


def language_code(language: str) -> str:
    """Return the YAKE language code for a search language name or code."""
    lowered = language.strip().lower()
    return LANGUAGE_CODES.get(lowered, lowered)


@runtime_checkable
class KeywordExtractor(Protocol):
    """Strategy that turns text into raw, unnormalized keywords.

    Implementations may be synchronous or return an awaitable. Failure is
    signalled by raising; an empty sequence means no keywords were found.
    """

    name: str

    def extract(self, text: str, options: ExtractionOptions) -> Any:  # pragma: no cover - interface definition
        ...


async def _call_off_loop(fn: Callable[..., Any], text: str, options: ExtractionOptions) -> Any:
    """Await ``fn`` when it is a coroutine function, else run it in a worker thread."""
    if inspect.iscoroutinefunction(fn):
        result = await fn(text, options)
    else:
        result = await asyncio.to_thread(fn, text, options)
    if inspect.isawaitable(result):
        result = await result
    return result


@lru_cache(maxsize=32)
def _yake_extractor(lan: str, n: int, top: int) -> yake.KeywordExtractor:
    return yake.KeywordExtractor(lan=lan, n=n, top=top)


class DefaultTermExtractor:
    """Statistical term extraction backed by YAKE."""

    name = "yake"

    def extract(self, text: str, options: ExtractionOptions) -> list[str]:
        extractor = _yake_extractor(language_code(options.language), options.ngram_size, options.max_keywords)
        return [keyword for keyword, _score in extractor.extract_keywords(text)]


class CustomExtractor:
    """Adapts a plain ``(text, options) -> keywords`` function, sync or async."""

    name = "custom"

    def __init__(self, fn: ExtractFunction) -> None:
        self.fn = fn

    async def extract(self, text: str, options: ExtractionOptions) -> Any:
        return await _call_off_loop(self.fn, text, options)


class ExtractorAdapter:
    """Run an extraction strategy under an error guard and normalize its output."""

    def __init__(self, options: ExtractionOptions, extractor: KeywordExtractor | None = None) -> None:
        """Initialize with options and an optional explicit strategy.

        Args:
            options: Extraction options shared by the record type
            extractor: Strategy to use; defaults to ``CustomExtractor`` when
                ``options.extract`` is set and ``DefaultTermExtractor`` otherwise
        """
        self.options = options
        if extractor is None:
            extractor = CustomExtractor(options.extract) if options.extract else DefaultTermExtractor()
        self.extractor = extractor

    async def extract(self, text: str) -> KeywordSet:
        """Extract normalized keywords from ``text``.

        Raises:
            ExtractionTimeoutError: The strategy exceeded ``extraction_timeout``
            ExtractionError: The strategy raised or returned something that is
                not a sequence of keywords
        """
        name = getattr(self.extractor, "name", type(self.extractor).__name__)
        start = time.perf_counter()
        with create_span("searchable.extract", attributes={"extractor": name, "text.length": len(text)}):
            try:
                raw = await self._run(text)
            except ExtractionError:
                EXTRACTIONS_TOTAL.labels(extractor=name, status="error").inc()
                raise
            finally:
                EXTRACTION_LATENCY.labels(extractor=name).observe(time.perf_counter() - start)

        EXTRACTIONS_TOTAL.labels(extractor=name, status="ok").inc()
        keywords = normalize_keywords(raw, self.options.blacklist)
        logger.debug("Extracted %d keywords with %s from %d chars", len(keywords), name, len(text))
        return keywords

    async def _run(self, text: str) -> list[Any]:
        timeout = self.options.extraction_timeout
        try:
            if timeout is None:
                raw = await self._invoke(text)
            else:
                raw = await asyncio.wait_for(self._invoke(text), timeout)
            if raw is None or isinstance(raw, (str, bytes, Mapping)) or not isinstance(raw, Iterable):
                raise ExtractionError(f"Extractor returned {type(raw).__name__}, expected a sequence of keywords")
            # Drain lazy results inside the guard
            return list(raw)
        except ExtractionError:
            raise
        except TimeoutError as exc:
            logger.warning("Keyword extraction timed out after %ss", timeout)
            raise ExtractionTimeoutError(f"Keyword extraction timed out after {timeout}s") from exc
        except Exception as exc:
            logger.warning("Keyword extraction failed: %s", exc)
            raise ExtractionError(f"Keyword extraction failed: {exc}") from exc

    async def _invoke(self, text: str) -> Any:
        return await _call_off_loop(self.extractor.extract, text, self.options)
