"""Adapters layer - datastore query rendering and repository contracts."""

from .text_query import (
    AbstractTextSearchRepository,
    MongoTextQuery,
    render_mongo_text_query,
    text_index_definition,
)


__all__ = [
    "AbstractTextSearchRepository",
    "MongoTextQuery",
    "render_mongo_text_query",
    "text_index_definition",
]
