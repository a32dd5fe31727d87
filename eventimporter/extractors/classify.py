"""URL-based page classification."""

from __future__ import annotations

from collections.abc import Iterable

from eventimporter.settings import EVENT_URL_MARKERS


def is_event_url(url: str, markers: Iterable[str] = EVENT_URL_MARKERS) -> bool:
    """Return True if *url* contains any event path marker.

    Plain substring test: no case folding, no trailing-slash handling.
    """
    return any(marker in url for marker in markers)
