"""Datastore adapters for full-text search.

``render_mongo_text_query`` turns a ``SearchFilter`` into the find, projection
and sort documents of a MongoDB ``$text`` query, scored by ``textScore``.
Repositories implementing ``AbstractTextSearchRepository`` execute filters
against their own store.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from searchable_records.domain.search import SearchFilter


SCORE_FIELD = "score"
TEXT_SCORE_META: dict[str, str] = {"$meta": "textScore"}


@dataclass(frozen=True)
class MongoTextQuery:
    """Arguments for ``collection.find(filter, projection).sort(sort)``."""

    filter: dict[str, Any] = field(default_factory=dict)
    projection: dict[str, Any] | None = None
    sort: list[tuple[str, Any]] | None = None


def render_mongo_text_query(search_filter: SearchFilter) -> MongoTextQuery:
    """Render a filter as a MongoDB ``$text`` query.

    An empty filter renders as a match-all query without score projection or
    sort.
    """
    if search_filter.matches_everything:
        return MongoTextQuery()

    text: dict[str, Any] = {
        "$search": search_filter.search_text,
        "$language": search_filter.language,
    }
    for key, value in search_filter.extra_options.items():
        text[f"${key}"] = value

    sort = [(SCORE_FIELD, dict(TEXT_SCORE_META))] if search_filter.sort_by_relevance_descending else None
    return MongoTextQuery(
        filter={"$text": text},
        projection={SCORE_FIELD: dict(TEXT_SCORE_META)},
        sort=sort,
    )


def text_index_definition(keyword_field: str = "keywords") -> list[tuple[str, str]]:
    """Index keys declaring ``keyword_field`` as the full-text indexed field."""
    return [(keyword_field, "text")]


class AbstractTextSearchRepository(ABC):
    """Repository that executes full-text search filters natively.

    Implementations must treat an empty ``search_text`` as "match everything,
    unscored" and sort by relevance descending when the filter asks for it.
    """

    @abstractmethod
    async def find_text(self, search_filter: SearchFilter, limit: int | None = None) -> list[Any]:
        """Return records matching ``search_filter``."""
        raise NotImplementedError
