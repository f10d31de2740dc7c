"""Keyword value objects.

A ``KeywordSet`` is only ever produced by the normalizer, so its members are
always trimmed, case-folded, non-empty and unique. First-seen order is kept so
results are reproducible.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from pydantic import BaseModel, ConfigDict, Field, model_validator


class KeywordSet(BaseModel):
    """Immutable, deduplicated collection of normalized keywords."""

    model_config = ConfigDict(frozen=True)

    keywords: tuple[str, ...] = Field(default_factory=tuple)

    @model_validator(mode="after")
    def _check_normalized(self) -> KeywordSet:
        seen: set[str] = set()
        for keyword in self.keywords:
            if not keyword or keyword != keyword.strip().casefold():
                raise ValueError(f"Keyword {keyword!r} is not normalized; use normalize_keywords")
            if keyword in seen:
                raise ValueError(f"Duplicate keyword {keyword!r}")
            seen.add(keyword)
        return self

    def __iter__(self) -> Iterator[str]:  # type: ignore[override]
        return iter(self.keywords)

    def __len__(self) -> int:
        return len(self.keywords)

    def __contains__(self, item: object) -> bool:
        return item in self.keywords

    def __bool__(self) -> bool:
        return bool(self.keywords)

    def as_list(self) -> list[str]:
        return list(self.keywords)

    def union(self, other: Iterable[str]) -> KeywordSet:
        """Return members of both sets, this set's order first.

        ``other`` is expected to be normalized already; callers holding raw
        tokens should go through ``normalize_keywords`` instead.
        """
        seen = dict.fromkeys(self.keywords)
        seen.update(dict.fromkeys(other))
        return KeywordSet(keywords=tuple(seen))

    def difference(self, other: Iterable[str]) -> KeywordSet:
        removed = set(other)
        return KeywordSet(keywords=tuple(k for k in self.keywords if k not in removed))
