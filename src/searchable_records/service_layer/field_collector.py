"""Concurrent keyword extraction across a record's source fields."""

from __future__ import annotations

import asyncio
import logging

from searchable_records.domain.errors import ExtractionError
from searchable_records.domain.keywords import KeywordSet
from searchable_records.domain.options import ExtractionOptions
from searchable_records.domain.record import Record
from searchable_records.observability.tracing import create_span
from searchable_records.services.extractor_service import ExtractorAdapter
from searchable_records.services.keyword_service import coerce_field_text, normalize_keywords


logger = logging.getLogger(__name__)


class FieldCollector:
    """Fan extraction out over source fields and join the results.

    Every non-empty field gets its own task and all tasks are awaited before
    any result is looked at. A failure in any field fails the whole collection
    and discards the other fields' keywords. Tasks still running when a sibling
    fails are not cancelled; they finish and their output is ignored.
    """

    def __init__(self, adapter: ExtractorAdapter, options: ExtractionOptions | None = None) -> None:
        self.adapter = adapter
        self.options = options or adapter.options

    def field_texts(self, record: Record) -> dict[str, str]:
        """Return the extraction text for each configured field that has a value."""
        texts: dict[str, str] = {}
        for field in self.options.fields:
            text = coerce_field_text(record.get(field))
            if text:
                texts[field] = text
        return texts

    def field_names_with_values(self, record: Record) -> list[str]:
        return list(self.field_texts(record))

    async def collect(self, record: Record) -> KeywordSet:
        """Extract and merge keywords from all non-empty source fields.

        Raises:
            ExtractionError: The first failing field, in configured field order,
                tagged with that field's name
        """
        texts = self.field_texts(record)
        if not texts:
            return KeywordSet()

        with create_span("searchable.collect", attributes={"fields": list(texts)}):
            tasks = {field: asyncio.ensure_future(self.adapter.extract(text)) for field, text in texts.items()}
            results = await asyncio.gather(*tasks.values(), return_exceptions=True)

            merged: list[str] = []
            for field, result in zip(tasks, results, strict=True):
                if isinstance(result, ExtractionError):
                    logger.warning("Extraction failed for field %s; discarding all field keywords", field)
                    raise result.for_field(field)
                if isinstance(result, BaseException):
                    raise result
                logger.debug("Field %s produced %d keywords", field, len(result))
                merged.extend(result)

        return normalize_keywords(merged, self.options.blacklist)
