"""Per-record-type extraction options.

Built once when a record type is made searchable and shared by every component
that works on that type. Frozen so that no component can change the
configuration another one depends on.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from searchable_records.domain.errors import ConfigError


if TYPE_CHECKING:
    from searchable_records.config import Settings


# (text, options) -> raw keywords, sync or async
ExtractFunction = Callable[..., Any]

DEFAULT_KEYWORD_FIELD = "keywords"
DEFAULT_LANGUAGE = "english"


class ExtractionOptions(BaseModel):
    """Immutable configuration for keyword extraction and search.

    Attributes:
        keyword_field: Record attribute that stores the keyword set.
        blacklist: Terms never emitted by the normalizer (compared after folding).
        fields: Ordered source field names that feed extraction.
        language: Search language hint, also used to pick the extractor language.
        extract: Optional custom extraction callable ``(text, options) -> keywords``.
        max_keywords: Maximum candidates returned by the default extractor per field.
        ngram_size: Maximum n-gram size considered by the default extractor.
        extraction_timeout: Optional per-field timeout in seconds.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True, extra="forbid")

    keyword_field: str = Field(default=DEFAULT_KEYWORD_FIELD, min_length=1)
    blacklist: frozenset[str] = Field(default_factory=frozenset)
    fields: tuple[str, ...] = Field(default_factory=tuple)
    language: str = Field(default=DEFAULT_LANGUAGE, min_length=1)
    extract: ExtractFunction | None = None
    max_keywords: int = Field(default=20, ge=1)
    ngram_size: int = Field(default=3, ge=1, le=5)
    extraction_timeout: float | None = Field(default=None, gt=0)

    @field_validator("blacklist", mode="before")
    @classmethod
    def _fold_blacklist(cls, value: Any) -> Any:
        if value is None:
            return frozenset()
        if isinstance(value, str):
            value = value.split(",")
        return frozenset(term.strip().casefold() for term in value if isinstance(term, str) and term.strip())

    @field_validator("fields", mode="before")
    @classmethod
    def _coerce_fields(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, str):
            value = value.split(",")
        # Drop blanks and repeats but keep the configured order
        return tuple(dict.fromkeys(name.strip() for name in value if name and name.strip()))

    @classmethod
    def from_settings(cls, settings: Settings, **overrides: Any) -> ExtractionOptions:
        """Build options from environment-driven settings plus explicit overrides."""
        data: dict[str, Any] = {
            "keyword_field": settings.keyword_field,
            "blacklist": settings.get_blacklist(),
            "fields": settings.get_fields(),
            "language": settings.language,
            "max_keywords": settings.max_keywords,
            "ngram_size": settings.ngram_size,
            "extraction_timeout": settings.extraction_timeout,
        }
        data.update(overrides)
        try:
            return cls(**data)
        except ValidationError as exc:
            raise ConfigError(f"Invalid extraction options: {exc}") from exc
