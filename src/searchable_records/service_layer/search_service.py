"""Search query construction and orchestration.

The phrase is tokenized directly (no content extraction) and run through the
same normalizer used for stored keywords, so query terms and indexed keywords
are canonicalized identically. Matching, negation and scoring are left to the
datastore.
"""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any

from searchable_records.adapters.text_query import AbstractTextSearchRepository
from searchable_records.domain.options import ExtractionOptions
from searchable_records.domain.search import SearchFilter
from searchable_records.observability.metrics import SEARCH_FILTERS_TOTAL
from searchable_records.services.keyword_service import normalize_keywords


logger = logging.getLogger(__name__)

# Keys a caller cannot set; the computed search text always wins
_RESERVED_OPTIONS = frozenset({"search_text", "search"})


class SearchQueryBuilder:
    """Build ``SearchFilter`` values for one searchable record type."""

    def __init__(self, options: ExtractionOptions) -> None:
        self.options = options

    def search_text(self, phrase: Any) -> str:
        """Normalize a phrase (string or list of strings) into search text."""
        if phrase is None:
            return ""
        if not isinstance(phrase, str):
            if isinstance(phrase, Mapping) or not hasattr(phrase, "__iter__"):
                return ""
            phrase = " ".join(part for part in phrase if isinstance(part, str))
        terms = normalize_keywords(phrase.split(), self.options.blacklist)
        return " ".join(terms).strip()

    def build(self, phrase: Any = None, search_options: Mapping[str, Any] | None = None) -> SearchFilter:
        """Build a search filter for ``phrase``.

        Directives merge in order: the configured language, then the caller's
        ``search_options``, then the computed search text. Callers can change
        the language and pass extra datastore options but never the text. A
        caller language that is not a non-blank string is ignored.

        Args:
            phrase: Search phrase as a string or list of strings; ``-term``
                tokens are passed through for the datastore to negate
            search_options: Extra datastore text-search options; Mongo-style
                ``$``-prefixed keys are accepted

        Returns:
            SearchFilter; an empty phrase matches everything and is unscored
        """
        directives: dict[str, Any] = {"language": self.options.language}
        if not isinstance(search_options, Mapping):
            search_options = {}
        for key, value in search_options.items():
            name = str(key).lstrip("$")
            if name in _RESERVED_OPTIONS:
                continue
            if name == "language" and not (isinstance(value, str) and value.strip()):
                continue
            directives[name] = value

        search_text = self.search_text(phrase)
        language = directives.pop("language")
        search_filter = SearchFilter(
            search_text=search_text,
            language=language,
            extra_options=directives,
            sort_by_relevance_descending=bool(search_text),
        )
        SEARCH_FILTERS_TOTAL.labels(scored=str(search_filter.sort_by_relevance_descending).lower()).inc()
        logger.debug("Built search filter: text=%r language=%s", search_text, language)
        return search_filter


class SearchService:
    """High-level search entry point for a searchable record type.

    Builds the filter and hands it to a repository that executes text search
    natively.
    """

    def __init__(self, options: ExtractionOptions, builder: SearchQueryBuilder | None = None) -> None:
        self.options = options
        self.builder = builder or SearchQueryBuilder(options)

    def build_filter(self, phrase: Any = None, search_options: Mapping[str, Any] | None = None) -> SearchFilter:
        return self.builder.build(phrase, search_options)

    async def search(
        self,
        phrase: Any,
        repository: AbstractTextSearchRepository,
        search_options: Mapping[str, Any] | None = None,
        limit: int | None = None,
    ) -> list[Any]:
        """Search records matching ``phrase``, best matches first when scored.

        Args:
            phrase: Search phrase as a string or list of strings
            repository: Datastore adapter that executes the filter
            search_options: Extra datastore text-search options
            limit: Maximum number of records to return

        Returns:
            Records as returned by the repository
        """
        search_filter = self.build_filter(phrase, search_options)
        results = await repository.find_text(search_filter, limit=limit)
        logger.debug("Search for %r returned %d records", search_filter.search_text, len(results))
        return results
