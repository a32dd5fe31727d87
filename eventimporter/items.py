"""Pydantic models: extracted event fields and per-page import rules."""

from __future__ import annotations

import re
from functools import cached_property
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, field_validator

from eventimporter import settings

# ---------------------------------------------------------------------------
# Extracted event metadata
# ---------------------------------------------------------------------------

class EventInfo(BaseModel):
    """Structured fields pulled from an event page.

    Every field is optional; a missing signal is simply left as ``None`` and
    dropped from :meth:`as_mapping`.
    """

    title: str | None = None
    image: str | None = None
    dates: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    venue: str | None = None
    tickets: str | None = None
    canonical_url: str | None = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = " ".join(v.split())
            return v or None
        return v

    def as_mapping(self) -> dict[str, str]:
        """Return the present fields, in declaration order."""
        return self.model_dump(exclude_none=True)


# ---------------------------------------------------------------------------
# Import rules (configuration)
# ---------------------------------------------------------------------------

class ImportRules(BaseModel):
    """Data that drives classification, stripping and filtering.

    Defaults mirror :mod:`eventimporter.settings`.
    """

    event_url_markers: list[str] = Field(
        default_factory=lambda: list(settings.EVENT_URL_MARKERS),
    )
    noise_selectors: list[str] = Field(
        default_factory=lambda: list(settings.NOISE_SELECTORS),
    )
    paragraph_min_length: int = Field(default=settings.PARAGRAPH_MIN_LENGTH, ge=0)
    paragraph_exclude_pattern: str = settings.PARAGRAPH_EXCLUDE_PATTERN
    ticket_link_markers: list[str] = Field(
        default_factory=lambda: list(settings.TICKET_LINK_MARKERS),
    )
    hero_image_selector: str = settings.HERO_IMAGE_SELECTOR
    disclaimer_fragment: str = settings.DISCLAIMER_FRAGMENT

    @field_validator("paragraph_exclude_pattern")
    @classmethod
    def check_pattern(cls, v: str) -> str:
        try:
            re.compile(v)
        except re.error as exc:
            raise ValueError(f"invalid paragraph exclusion pattern {v!r}: {exc}") from exc
        return v

    @cached_property
    def paragraph_exclude_re(self) -> re.Pattern[str]:
        return re.compile(self.paragraph_exclude_pattern, re.IGNORECASE)

    @classmethod
    def from_params(cls, params: Mapping[str, Any] | None) -> ImportRules:
        """Build rules from an importer ``params`` mapping.

        Keys that are not rule fields (the import process passes its own
        bookkeeping through ``params``) are ignored.
        """
        if not params:
            return cls()
        overrides = {k: v for k, v in params.items() if k in cls.model_fields}
        return cls(**overrides)
