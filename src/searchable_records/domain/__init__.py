"""Domain layer - value objects, configuration and record contracts.

Nothing in here performs I/O or extraction; services and the service layer
operate on these types.
"""

from searchable_records.domain.errors import (
    ConfigError,
    ExtractionError,
    ExtractionTimeoutError,
    SearchableError,
)
from searchable_records.domain.keywords import KeywordSet
from searchable_records.domain.options import ExtractionOptions
from searchable_records.domain.record import MappingRecord, ModelRecord, Record
from searchable_records.domain.search import SearchFilter


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
    "SearchableError",
]
