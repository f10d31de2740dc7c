"""Keyword normalization services.

Pure functions with no external dependencies. The same normalizer runs on the
index side (extracted and explicit keywords) and on the query side (search
phrases), so both are canonicalized identically.
"""

from collections.abc import Iterable
from typing import Any

from searchable_records.domain.keywords import KeywordSet


def normalize_keywords(raw_tokens: Any, blacklist: Iterable[str] = ()) -> KeywordSet:
    """Turn raw tokens into a canonical keyword set.

    Non-string, empty and whitespace-only tokens are dropped. The rest are
    trimmed and case-folded, blacklisted terms removed, and duplicates
    collapsed keeping first-seen order. Never raises.

    Args:
        raw_tokens: Iterable of candidate keywords; anything else yields an empty set
        blacklist: Terms to exclude, compared after folding

    Returns:
        KeywordSet with unique normalized keywords
    """
    if isinstance(raw_tokens, str):
        raw_tokens = [raw_tokens]
    elif not isinstance(raw_tokens, Iterable) or isinstance(raw_tokens, (bytes, bytearray)):
        raw_tokens = []

    excluded = {term.strip().casefold() for term in blacklist if isinstance(term, str)}
    seen: dict[str, None] = {}
    for token in raw_tokens:
        if not isinstance(token, str):
            continue
        keyword = token.strip().casefold()
        if not keyword or keyword in excluded:
            continue
        seen.setdefault(keyword, None)
    return KeywordSet(keywords=tuple(seen))


def coerce_terms(value: Any) -> list[str]:
    """Coerce caller-supplied keywords into a list of candidate terms.

    ``None`` becomes an empty list, a bare string is split on whitespace, any
    other iterable is listed as-is and a lone scalar is boxed.
    """
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    if isinstance(value, Iterable) and not isinstance(value, (bytes, bytearray)):
        return list(value)
    return [value]


def coerce_field_text(value: Any) -> str:
    """Join a field value into one text blob for extraction.

    Scalars become a single-element sequence; sequences keep their members.
    Falsy members are skipped and the rest stringified and joined with single
    spaces. Returns an empty string when nothing is left.
    """
    if not value:
        return ""
    if isinstance(value, str):
        parts: list[Any] = [value]
    elif isinstance(value, Iterable) and not isinstance(value, (bytes, bytearray)):
        parts = list(value)
    else:
        parts = [value]
    text = " ".join(str(part) for part in parts if part)
    return text if text.strip() else ""
