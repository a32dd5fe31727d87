"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest
from bs4 import BeautifulSoup

FIXTURES_DIR = Path(__file__).parent / "fixtures"

EVENT_URL = "https://example.com/schedule-of-events/symphony-gala.html"
PROMO_URL = "https://example.com/events-and-promotions/comedy-night"
GENERIC_URL = "https://example.com/about-us.html"


def _read_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


def make_soup(body: str) -> BeautifulSoup:
    """Wrap *body* markup in a minimal document."""
    return BeautifulSoup(f"<html><head></head><body>{body}</body></html>", "lxml")


@pytest.fixture(autouse=True)
def _reset_plugins():
    from eventimporter.plugins import clear_plugins

    clear_plugins()
    yield
    clear_plugins()


@pytest.fixture
def event_html() -> str:
    return _read_fixture("event_page.html")


@pytest.fixture
def markup_event_html() -> str:
    return _read_fixture("markup_event_page.html")


@pytest.fixture
def generic_html() -> str:
    return _read_fixture("generic_page.html")


@pytest.fixture
def event_soup(event_html) -> BeautifulSoup:
    return BeautifulSoup(event_html, "lxml")


@pytest.fixture
def markup_event_soup(markup_event_html) -> BeautifulSoup:
    return BeautifulSoup(markup_event_html, "lxml")
