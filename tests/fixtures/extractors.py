"""Deterministic extraction functions for tests."""

import re

from searchable_records.domain.options import ExtractionOptions


STOPWORDS = frozenset({"a", "an", "and", "for", "in", "of", "the", "to", "with"})


def word_extractor(text: str, options: ExtractionOptions) -> list[str]:
    """Every non-stopword word, in order of appearance."""
    return [word for word in re.findall(r"[\w']+", text) if word.lower() not in STOPWORDS]
