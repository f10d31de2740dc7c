"""Centralized configuration for searchable-records using Pydantic Settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process-wide defaults loaded from ``SEARCHABLE_*`` environment variables.

    These are defaults only. Each searchable record type gets its own
    immutable ``ExtractionOptions`` built from them via
    ``ExtractionOptions.from_settings``.
    """

    model_config = SettingsConfigDict(
        env_prefix="SEARCHABLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    keyword_field: str = Field(default="keywords", min_length=1, description="Record attribute storing keywords")
    language: str = Field(default="english", min_length=1, description="Default full-text search language")
    blacklist: str = Field(default="", description="Comma-separated terms never stored as keywords")
    fields: str = Field(default="", description="Comma-separated source fields used for extraction")

    # Default extractor tuning
    max_keywords: int = Field(default=20, ge=1, description="Maximum keywords extracted per field")
    ngram_size: int = Field(default=3, ge=1, le=5, description="Maximum n-gram size for extracted keywords")
    extraction_timeout: float | None = Field(
        default=None, gt=0, description="Per-field extraction timeout in seconds (unset waits indefinitely)"
    )

    # Logging
    log_level: str = Field(default="info", description="Logging level")
    log_json: bool = Field(default=True, description="Emit structured JSON logs")

    def get_blacklist(self) -> list[str]:
        """Get blacklisted terms as a list."""
        if not self.blacklist:
            return []
        return [term.strip() for term in self.blacklist.split(",") if term.strip()]

    def get_fields(self) -> list[str]:
        """Get configured source field names in order."""
        if not self.fields:
            return []
        return [name.strip() for name in self.fields.split(",") if name.strip()]
