"""Unit tests for concurrent field extraction."""

import asyncio

import pytest

from searchable_records.domain.errors import ExtractionError
from searchable_records.domain.keywords import KeywordSet
from searchable_records.domain.options import ExtractionOptions
from searchable_records.domain.record import MappingRecord
from searchable_records.service_layer.field_collector import FieldCollector
from searchable_records.services.extractor_service import ExtractorAdapter


class ScriptedExtractor:
    """Async extractor whose per-text behaviour is scripted by the test.

    ``script`` maps text to either a list of keywords or an exception. Every
    call is logged on entry and on completion so tests can assert on
    concurrency.
    """

    name = "scripted"

    def __init__(self, script, delays=None):
        self.script = script
        self.delays = delays or {}
        self.started: list[str] = []
        self.finished: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def extract(self, text, options):
        self.started.append(text)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(text, 0.01))
            outcome = self.script[text]
            if isinstance(outcome, Exception):
                raise outcome
            return outcome
        finally:
            self.in_flight -= 1
            self.finished.append(text)


def _collector(script, fields=("title", "authors", "categories"), delays=None, **option_overrides):
    options = ExtractionOptions(fields=fields, **option_overrides)
    extractor = ScriptedExtractor(script, delays)
    return FieldCollector(ExtractorAdapter(options, extractor), options), extractor


class TestFieldTexts:
    def test_skips_empty_and_missing_fields(self):
        collector, _ = _collector({}, fields=("title", "authors", "categories", "missing"))
        record = MappingRecord({"title": "Jazz History", "authors": [], "categories": ""})

        assert collector.field_texts(record) == {"title": "Jazz History"}
        assert collector.field_names_with_values(record) == ["title"]

    def test_sequences_joined_with_spaces(self):
        collector, _ = _collector({})
        record = MappingRecord({"authors": ["John Doe", "Jane Roe"]})
        assert collector.field_texts(record) == {"authors": "John Doe Jane Roe"}


@pytest.mark.asyncio
class TestCollect:
    async def test_merges_all_fields_through_one_normalizer_pass(self):
        script = {
            "Practical Python Search": ["Practical", "Python", "Search"],
            "John Doe Jane Roe": ["John", "Doe", "Jane", "Roe", "python"],
            "programming": ["Programming"],
        }
        collector, _ = _collector(script)
        record = MappingRecord(
            {"title": "Practical Python Search", "authors": ["John Doe", "Jane Roe"], "categories": ["programming"]}
        )

        result = await collector.collect(record)

        assert result.as_list() == ["practical", "python", "search", "john", "doe", "jane", "roe", "programming"]

    async def test_runs_fields_concurrently(self):
        script = {"a": ["a"], "b": ["b"], "c": ["c"]}
        collector, extractor = _collector(script, fields=("f1", "f2", "f3"))
        record = MappingRecord({"f1": "a", "f2": "b", "f3": "c"})

        await collector.collect(record)

        assert extractor.max_in_flight == 3

    async def test_no_fields_with_values_schedules_nothing(self):
        collector, extractor = _collector({})
        result = await collector.collect(MappingRecord({"title": None}))
        assert result == KeywordSet()
        assert extractor.started == []

    async def test_result_order_follows_field_order_not_completion(self):
        script = {"slow": ["slow"], "fast": ["fast"]}
        collector, _ = _collector(script, fields=("first", "second"), delays={"slow": 0.05, "fast": 0.0})
        record = MappingRecord({"first": "slow", "second": "fast"})

        assert (await collector.collect(record)).as_list() == ["slow", "fast"]

    async def test_failure_discards_sibling_results(self):
        script = {"ok one": ["one"], "broken": RuntimeError("extractor down"), "ok two": ["two"]}
        collector, _ = _collector(script, fields=("a", "b", "c"))
        record = MappingRecord({"a": "ok one", "b": "broken", "c": "ok two"})

        with pytest.raises(ExtractionError) as exc_info:
            await collector.collect(record)

        assert exc_info.value.field == "b"
        assert "extractor down" in str(exc_info.value)

    async def test_failure_waits_for_stragglers_without_cancelling(self):
        script = {"fails fast": ValueError("bad text"), "slow": ["slow"]}
        collector, extractor = _collector(
            script, fields=("a", "b"), delays={"fails fast": 0.0, "slow": 0.05}
        )
        record = MappingRecord({"a": "fails fast", "b": "slow"})

        with pytest.raises(ExtractionError):
            await collector.collect(record)

        # The slow sibling ran to completion rather than being cancelled
        assert sorted(extractor.finished) == ["fails fast", "slow"]

    async def test_first_failure_in_field_order_is_reported(self):
        script = {"x": ValueError("first"), "y": ValueError("second")}
        collector, _ = _collector(script, fields=("a", "b"), delays={"x": 0.05, "y": 0.0})
        record = MappingRecord({"a": "x", "b": "y"})

        with pytest.raises(ExtractionError) as exc_info:
            await collector.collect(record)

        assert exc_info.value.field == "a"

    async def test_blacklist_applies_to_merged_result(self):
        script = {"The Art of Baking": ["The", "Art", "Baking"]}
        collector, _ = _collector(script, fields=("title",), blacklist=["the"])
        record = MappingRecord({"title": "The Art of Baking"})

        assert (await collector.collect(record)).as_list() == ["art", "baking"]

    async def test_lazy_result_failure_is_tagged_with_field(self):
        def lazy(text, options):
            yield text
            if text == "Miles Cole":
                raise RuntimeError("boom")

        options = ExtractionOptions(fields=("title", "authors"), extract=lazy)
        collector = FieldCollector(ExtractorAdapter(options), options)
        record = MappingRecord({"title": "Jazz History", "authors": ["Miles Cole"]})

        with pytest.raises(ExtractionError) as exc_info:
            await collector.collect(record)

        assert exc_info.value.field == "authors"
        assert isinstance(exc_info.value.__cause__, RuntimeError)
