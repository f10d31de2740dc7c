"""Search query value objects."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SearchFilter(BaseModel):
    """Datastore-neutral description of a full-text search.

    ``search_text`` holds the normalized terms joined with single spaces,
    negated ``-term`` tokens included. An empty ``search_text`` matches every
    record and is never relevance-sorted.
    """

    model_config = ConfigDict(frozen=True)

    search_text: str = ""
    language: str
    extra_options: dict[str, Any] = Field(default_factory=dict)
    sort_by_relevance_descending: bool = False

    @property
    def matches_everything(self) -> bool:
        return not self.search_text

    @property
    def terms(self) -> list[str]:
        return self.search_text.split()

    @property
    def negated_terms(self) -> list[str]:
        return [term[1:] for term in self.terms if term.startswith("-") and len(term) > 1]
