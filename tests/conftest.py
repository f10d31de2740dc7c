"""Shared test fixtures and configuration."""

from copy import deepcopy
import os
from pathlib import Path
import sys

import pytest


REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


# Complete test environment that overrides every SEARCHABLE_* setting
TEST_ENV = {
    "SEARCHABLE_KEYWORD_FIELD": "keywords",
    "SEARCHABLE_LANGUAGE": "english",
    "SEARCHABLE_BLACKLIST": "",
    "SEARCHABLE_FIELDS": "",
    "SEARCHABLE_MAX_KEYWORDS": "20",
    "SEARCHABLE_NGRAM_SIZE": "3",
    "SEARCHABLE_LOG_LEVEL": "info",
    "SEARCHABLE_LOG_JSON": "true",
}

for key, value in TEST_ENV.items():
    os.environ[key] = value
os.environ.pop("SEARCHABLE_EXTRACTION_TIMEOUT", None)

from searchable_records.domain.options import ExtractionOptions  # noqa: E402
from searchable_records.domain.record import MappingRecord  # noqa: E402
from tests.fixtures.books import BOOK_FIELDS, BOOKS  # noqa: E402
from tests.fixtures.extractors import word_extractor  # noqa: E402


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Pin SEARCHABLE_* variables for every test."""
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)
    monkeypatch.delenv("SEARCHABLE_EXTRACTION_TIMEOUT", raising=False)


@pytest.fixture
def books() -> list[dict]:
    return deepcopy(BOOKS)


@pytest.fixture
def book_options() -> ExtractionOptions:
    """Options for book records using the deterministic word extractor."""
    return ExtractionOptions(fields=BOOK_FIELDS, extract=word_extractor)


@pytest.fixture
def book_record(books) -> MappingRecord:
    return MappingRecord(books[0])
