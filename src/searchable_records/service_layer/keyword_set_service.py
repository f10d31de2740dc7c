"""Keyword set operations on records.

``keywordize`` merges explicit and extracted keywords into the record's
keyword attribute; ``unkeywordize`` removes keywords from it. The record is
written only once all extraction has succeeded, so a failed ``keywordize``
leaves the stored keywords exactly as they were.
"""

from __future__ import annotations

import logging
from typing import Any

from searchable_records.domain.errors import ExtractionError
from searchable_records.domain.keywords import KeywordSet
from searchable_records.domain.options import ExtractionOptions
from searchable_records.domain.record import Record
from searchable_records.observability.metrics import KEYWORDIZE_TOTAL
from searchable_records.observability.tracing import create_span
from searchable_records.service_layer.field_collector import FieldCollector
from searchable_records.services.extractor_service import ExtractorAdapter
from searchable_records.services.keyword_service import coerce_terms, normalize_keywords


logger = logging.getLogger(__name__)


def _stored_terms(value: Any) -> list[Any]:
    # Stored keywords are a list; a bare string is one keyword, not a phrase to split
    if isinstance(value, str):
        return [value]
    return coerce_terms(value)


class KeywordSetService:
    """Maintain the keyword attribute of records of one searchable type."""

    def __init__(self, options: ExtractionOptions, collector: FieldCollector | None = None) -> None:
        """Initialize with the record type's options.

        Args:
            options: Extraction options for the record type
            collector: Field collector to use; built from ``options`` when omitted
        """
        self.options = options
        self.collector = collector or FieldCollector(ExtractorAdapter(options), options)

    def current_keywords(self, record: Record) -> KeywordSet:
        """Return the record's stored keywords, normalized."""
        return normalize_keywords(_stored_terms(record.get(self.options.keyword_field)), self.options.blacklist)

    async def keywordize(self, record: Record, keywords: Any = None) -> Record:
        """Union explicit, stored and extracted keywords onto the record.

        Args:
            record: Record to update
            keywords: Extra keywords; a string is split on whitespace

        Returns:
            The same record, updated

        Raises:
            ExtractionError: Extraction failed for a source field; the record is
                left unmodified
        """
        explicit = normalize_keywords(coerce_terms(keywords), self.options.blacklist)
        baseline = self.current_keywords(record).union(explicit)

        with create_span("searchable.keywordize", attributes={"explicit.count": len(explicit)}):
            try:
                extracted = await self.collector.collect(record)
            except ExtractionError:
                KEYWORDIZE_TOTAL.labels(status="error").inc()
                raise

        result = normalize_keywords(baseline.union(extracted), self.options.blacklist)
        record.set(self.options.keyword_field, result.as_list())
        KEYWORDIZE_TOTAL.labels(status="ok").inc()
        logger.info(
            "Keywordized record: %d keywords (%d explicit, %d extracted)",
            len(result),
            len(explicit),
            len(extracted),
        )
        return record

    def unkeywordize(self, record: Record, keywords: Any) -> Record:
        """Remove each given keyword from the record's keyword attribute.

        Terms are normalized the same way stored keywords are, then removed
        one by one by exact match. No extraction runs.
        """
        removed = normalize_keywords(coerce_terms(keywords))
        remaining = self.current_keywords(record).difference(removed)
        record.set(self.options.keyword_field, remaining.as_list())
        logger.debug("Unkeywordized %d terms; %d keywords remain", len(removed), len(remaining))
        return record

    def needs_keywordize(self, record: Record) -> bool:
        """True when the record is new or any source field changed since load."""
        return record.is_new or any(record.is_modified(field) for field in self.options.fields)

    async def before_save(self, record: Record) -> bool:
        """Save hook: refresh keywords when source fields changed.

        Returns:
            True if ``keywordize`` ran
        """
        if not self.needs_keywordize(record):
            return False
        await self.keywordize(record)
        return True
