"""Keyword indexing and full-text search query building for arbitrary records."""

from searchable_records.domain import (
    ConfigError,
    ExtractionError,
    ExtractionOptions,
    ExtractionTimeoutError,
    KeywordSet,
    MappingRecord,
    ModelRecord,
    Record,
    SearchableError,
    SearchFilter,
)
from searchable_records.searchable import Searchable
from searchable_records.services.keyword_service import normalize_keywords


__all__ = [
    "ConfigError",
    "ExtractionError",
    "ExtractionOptions",
    "ExtractionTimeoutError",
    "KeywordSet",
    "MappingRecord",
    "ModelRecord",
    "Record",
    "SearchFilter",
    "Searchable",
    "SearchableError",
    "normalize_keywords",
]
