"""Errors raised by the keyword indexing pipeline."""

from __future__ import annotations


class SearchableError(Exception):
    """Base error for searchable records."""


class ConfigError(SearchableError):
    """Raised when settings cannot be turned into valid extraction options."""


class ExtractionError(SearchableError):
    """Raised when the keyword extractor fails for a piece of text.

    ``field`` is filled in by the field collector once the failing source
    field is known. The underlying failure is available as ``__cause__``.
    """

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field

    def for_field(self, field: str) -> ExtractionError:
        """Return this error tagged with the source field it came from."""
        self.field = field
        return self

    def __str__(self) -> str:
        message = super().__str__()
        if self.field:
            return f"{message} (field={self.field!r})"
        return message


class ExtractionTimeoutError(ExtractionError):
    """Raised when extraction for a field exceeds the configured timeout."""
