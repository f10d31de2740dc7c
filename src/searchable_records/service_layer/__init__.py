"""Service layer - keyword indexing and search orchestration."""

from .field_collector import FieldCollector
from .keyword_set_service import KeywordSetService
from .search_service import SearchQueryBuilder, SearchService


__all__ = [
    "FieldCollector",
    "KeywordSetService",
    "SearchQueryBuilder",
    "SearchService",
]
