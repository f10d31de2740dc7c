"""Stateless services: keyword normalization and extraction."""

from .extractor_service import (
    CustomExtractor,
    DefaultTermExtractor,
    ExtractorAdapter,
    KeywordExtractor,
)
from .keyword_service import coerce_field_text, coerce_terms, normalize_keywords


__all__ = [
    "CustomExtractor",
    "DefaultTermExtractor",
    "ExtractorAdapter",
    "KeywordExtractor",
    "coerce_field_text",
    "coerce_terms",
    "normalize_keywords",
]
