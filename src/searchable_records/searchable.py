"""Entry point that makes a record type searchable.

``Searchable`` wires the services for one record type around a single
immutable ``ExtractionOptions`` instance.

Example:
    books = Searchable.from_settings(fields=("title", "authors", "categories"))
    await books.keywordize(record)
    search_filter = books.build_search("john doe")
"""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any

from searchable_records.adapters.text_query import (
    AbstractTextSearchRepository,
    MongoTextQuery,
    render_mongo_text_query,
    text_index_definition,
)
from searchable_records.config import Settings
from searchable_records.domain.keywords import KeywordSet
from searchable_records.domain.options import ExtractionOptions
from searchable_records.domain.record import Record
from searchable_records.domain.search import SearchFilter
from searchable_records.service_layer.field_collector import FieldCollector
from searchable_records.service_layer.keyword_set_service import KeywordSetService
from searchable_records.service_layer.search_service import SearchQueryBuilder, SearchService
from searchable_records.services.extractor_service import ExtractorAdapter, KeywordExtractor


logger = logging.getLogger(__name__)


class Searchable:
    """Keyword indexing and search for one record type."""

    def __init__(self, options: ExtractionOptions | None = None, *, extractor: KeywordExtractor | None = None) -> None:
        """Initialize the services for a record type.

        Args:
            options: Extraction options; library defaults when omitted
            extractor: Explicit extraction strategy overriding ``options.extract``
        """
        self.options = options or ExtractionOptions()
        self.adapter = ExtractorAdapter(self.options, extractor)
        self.collector = FieldCollector(self.adapter, self.options)
        self.keyword_sets = KeywordSetService(self.options, self.collector)
        self.search_service = SearchService(self.options, SearchQueryBuilder(self.options))
        logger.debug(
            "Searchable configured: keyword_field=%s fields=%s language=%s extractor=%s",
            self.options.keyword_field,
            list(self.options.fields),
            self.options.language,
            getattr(self.adapter.extractor, "name", type(self.adapter.extractor).__name__),
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        extractor: KeywordExtractor | None = None,
        **overrides: Any,
    ) -> Searchable:
        """Build from ``SEARCHABLE_*`` settings, with per-type overrides."""
        options = ExtractionOptions.from_settings(settings or Settings(), **overrides)
        return cls(options, extractor=extractor)

    async def keywordize(self, record: Record, keywords: Any = None) -> Record:
        return await self.keyword_sets.keywordize(record, keywords)

    def unkeywordize(self, record: Record, keywords: Any) -> Record:
        return self.keyword_sets.unkeywordize(record, keywords)

    def keywords(self, record: Record) -> KeywordSet:
        return self.keyword_sets.current_keywords(record)

    async def before_save(self, record: Record) -> bool:
        return await self.keyword_sets.before_save(record)

    def build_search(self, phrase: Any = None, search_options: Mapping[str, Any] | None = None) -> SearchFilter:
        return self.search_service.build_filter(phrase, search_options)

    def mongo_query(self, phrase: Any = None, search_options: Mapping[str, Any] | None = None) -> MongoTextQuery:
        """Build the MongoDB ``$text`` query for ``phrase``."""
        return render_mongo_text_query(self.build_search(phrase, search_options))

    async def search(
        self,
        phrase: Any,
        repository: AbstractTextSearchRepository,
        search_options: Mapping[str, Any] | None = None,
        limit: int | None = None,
    ) -> list[Any]:
        return await self.search_service.search(phrase, repository, search_options, limit)

    def index_definition(self) -> list[tuple[str, str]]:
        """Index keys for the full-text indexed keyword field."""
        return text_index_definition(self.options.keyword_field)
