"""Event metadata extraction.

Read-only pass over the page, run before any chrome is stripped so that
JSON-LD ``<script>`` blocks and ``<head>`` meta tags are still present.
Markup lookups skip whatever the noise selectors match, so a header logo or
footer timestamp never stands in for the event itself.

Priority chain per field (highest to lowest):
    JSON-LD Event -> Open Graph -> page markup (headings, classes, <time>)
"""

from __future__ import annotations

import contextlib
import json
import logging
import re
from datetime import datetime
from typing import Any
from urllib.parse import urljoin

import dateparser
from bs4 import BeautifulSoup, Tag

from eventimporter.items import EventInfo, ImportRules

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

# Longest text accepted from a class-matched element (dates, venue).
_MAX_LABEL_LENGTH = 120

_WHITESPACE_RE = re.compile(r"\s+")

_MONTH = (
    r"(?:Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|June?|July?|"
    r"Aug(?:ust)?|Sep(?:t(?:ember)?)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)"
)
_DAY = r"\d{1,2}(?:st|nd|rd|th)?"

# "March 14", "Mar 14-16, 2025", "March 30 - April 2, 2025"
_DATE_PHRASE_RE = re.compile(
    rf"\b(?P<m1>{_MONTH})\.?\s+(?P<d1>{_DAY})"
    rf"(?:\s*[-–—]\s*(?:(?P<m2>{_MONTH})\.?\s+)?(?P<d2>{_DAY}))?"
    r"(?:,?\s+(?P<year>\d{4}))?\b",
    re.IGNORECASE,
)
_ORDINAL_RE = re.compile(r"(?<=\d)(st|nd|rd|th)\b", re.IGNORECASE)

_DATE_CLASS_RE = re.compile(r"(^|[-_])(event-)?dates?($|[-_])", re.IGNORECASE)
_VENUE_CLASS_RE = re.compile(r"venue|location", re.IGNORECASE)


def _safe_str(val: Any, default: str = "") -> str:
    if val is None:
        return default
    if isinstance(val, list):
        return " ".join(str(v) for v in val)
    return str(val)


def _first(*values: Any) -> Any:
    for v in values:
        if v:
            return v
    return None


def _text(tag: Tag | None) -> str:
    if tag is None:
        return ""
    return _WHITESPACE_RE.sub(" ", tag.get_text(" ")).strip()


def _short_text(tag: Tag | None) -> str | None:
    text = _text(tag)
    if text and len(text) <= _MAX_LABEL_LENGTH:
        return text
    return None


def _chrome_ids(document: BeautifulSoup, selectors: list[str]) -> set[int]:
    """Identify the elements the noise stripper is going to remove."""
    return {id(el) for selector in selectors for el in document.select(selector)}


def _in_chrome(tag: Tag, chrome: set[int]) -> bool:
    return id(tag) in chrome or any(id(parent) in chrome for parent in tag.parents)


def _find_content(root: Tag, chrome: set[int], *args: Any, **kwargs: Any) -> Tag | None:
    """Like ``root.find`` but skipping anything inside page chrome."""
    for tag in root.find_all(*args, **kwargs):
        if not _in_chrome(tag, chrome):
            return tag
    return None


def _resolve(href: str | None, page_url: str) -> str | None:
    if not href:
        return None
    href = href.strip()
    if not href or href.startswith(("http://", "https://", "data:")) or not page_url:
        return href or None
    return urljoin(page_url, href)


def _parse_date(raw: str | None) -> str | None:
    """Parse *raw* to ISO 8601.

    Date-only input yields ``YYYY-MM-DD``; input carrying a time keeps it.
    Years outside 1990-2099 are treated as parse noise.
    """
    if not raw:
        return None
    raw = _ORDINAL_RE.sub("", _WHITESPACE_RE.sub(" ", raw.strip()))
    parsed = None
    # schema.org dates are ISO 8601; free text goes through dateparser.
    with contextlib.suppress(ValueError):
        parsed = datetime.fromisoformat(raw)
    try:
        parsed = parsed or dateparser.parse(
            raw,
            settings={
                "PREFER_DAY_OF_MONTH": "first",
                "PREFER_LOCALE_DATE_ORDER": False,
            },
        )
    except Exception as exc:
        logger.debug("Date parse failed for %r: %s", raw, exc)
        return None
    if not parsed or not (1990 <= parsed.year <= 2099):
        return None
    if ":" in raw:
        return parsed.isoformat()
    return parsed.date().isoformat()


# ---------------------------------------------------------------------------
# JSON-LD
# ---------------------------------------------------------------------------

def _is_event_type(node: dict) -> bool:
    dtype = node.get("@type", "")
    types = dtype if isinstance(dtype, list) else [dtype]
    return any(
        str(t).lower().endswith("event") or str(t).lower() == "festival" for t in types
    )


def _extract_jsonld_event(document: BeautifulSoup) -> dict:
    """Return the first schema.org Event node on the page, or ``{}``."""
    for script in document.find_all("script", type="application/ld+json"):
        try:
            raw = json.loads(script.string or "")
        except (json.JSONDecodeError, TypeError) as exc:
            logger.debug("Skipping malformed JSON-LD block: %s", exc)
            continue

        nodes: list = []
        if isinstance(raw, list):
            nodes = raw
        elif isinstance(raw, dict):
            nodes = raw.get("@graph", [raw])

        for node in nodes:
            if isinstance(node, dict) and _is_event_type(node):
                return node
    return {}


def _jsonld_image(node: dict) -> str | None:
    image = node.get("image")
    if isinstance(image, list):
        image = image[0] if image else None
    if isinstance(image, dict):
        image = image.get("url") or image.get("contentUrl")
    return _safe_str(image) or None


def _jsonld_location(node: dict) -> str | None:
    location = node.get("location")
    if isinstance(location, list):
        location = location[0] if location else None
    if isinstance(location, dict):
        return _safe_str(location.get("name")) or None
    return _safe_str(location) or None


def _jsonld_offer_url(node: dict) -> str | None:
    offers = node.get("offers")
    if isinstance(offers, list):
        offers = offers[0] if offers else None
    if isinstance(offers, dict):
        return _safe_str(offers.get("url")) or None
    return None


# ---------------------------------------------------------------------------
# Open Graph / canonical
# ---------------------------------------------------------------------------

def _extract_og(document: BeautifulSoup) -> dict[str, str]:
    og: dict[str, str] = {}
    for tag in document.find_all("meta"):
        prop = _safe_str(tag.get("property") or tag.get("name")).lower()
        content = _safe_str(tag.get("content")).strip()
        if content and prop.startswith("og:"):
            og.setdefault(prop, content)
    return og


def _extract_canonical(document: BeautifulSoup, og: dict[str, str], page_url: str) -> str | None:
    for link in document.find_all("link"):
        rel = link.get("rel")
        if isinstance(rel, list) and "canonical" in rel:
            href = _safe_str(link.get("href")).strip()
            if href:
                return _resolve(href, page_url)
    return og.get("og:url")


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------

def _dates_from_phrase(text: str) -> tuple[str | None, str | None, str | None]:
    """Find a month-name date (or range) in *text*.

    Returns ``(phrase, start_iso, end_iso)``.
    """
    m = _DATE_PHRASE_RE.search(text)
    if not m:
        return None, None, None
    year = m.group("year") or ""
    start = _parse_date(f"{m.group('m1')} {m.group('d1')} {year}")
    end = None
    if m.group("d2"):
        end = _parse_date(f"{m.group('m2') or m.group('m1')} {m.group('d2')} {year}")
    return m.group(0).strip(), start, end


def _content_text(root: Tag, chrome: set[int]) -> str:
    parts = [s for s in root.find_all(string=True) if not _in_chrome(s.parent, chrome)]
    return _WHITESPACE_RE.sub(" ", " ".join(parts)).strip()


def _extract_dates(
    document: BeautifulSoup,
    jsonld: dict,
    chrome: set[int],
) -> dict[str, str | None]:
    start_raw = _safe_str(jsonld.get("startDate")).strip()
    end_raw = _safe_str(jsonld.get("endDate")).strip()
    if start_raw:
        return {
            "dates": f"{start_raw} - {end_raw}" if end_raw else start_raw,
            "start_date": _parse_date(start_raw),
            "end_date": _parse_date(end_raw),
        }

    body = document.body or document
    date_el = _find_content(body, chrome, class_=_DATE_CLASS_RE)
    times = [t for t in body.find_all("time") if not _in_chrome(t, chrome)]
    text = _first(
        _short_text(date_el),
        _short_text(times[0]) if times else None,
    )

    start = end = None
    if times:
        start = _parse_date(_safe_str(times[0].get("datetime")))
        if len(times) > 1:
            end = _parse_date(_safe_str(times[1].get("datetime")))

    phrase, phrase_start, phrase_end = _dates_from_phrase(text or _content_text(body, chrome))
    return {
        "dates": text or phrase,
        "start_date": start or phrase_start,
        "end_date": end or (phrase_end if not start else None),
    }


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_event_info(
    document: BeautifulSoup,
    url: str = "",
    rules: ImportRules | None = None,
) -> EventInfo:
    """Collect title, image, dates, venue, tickets and canonical URL.

    Never mutates *document*; every field is optional.  Markup fallbacks
    ignore elements the noise stripper removes, so the title and image agree
    with the rebuilt hero section.
    """
    rules = rules or ImportRules()
    jsonld = _extract_jsonld_event(document)
    og = _extract_og(document)
    chrome = _chrome_ids(document, rules.noise_selectors)
    body = document.body or document

    # ---- title ----
    title_tag = document.find("title")
    title = _first(
        _safe_str(jsonld.get("name")).strip(),
        og.get("og:title"),
        _text(_find_content(body, chrome, "h1")),
        _text(_find_content(body, chrome, "h2")),
        _text(title_tag),
    )

    # ---- image ----
    hero = next(
        (img for img in body.select(rules.hero_image_selector) if not _in_chrome(img, chrome)),
        None,
    )
    image = _resolve(
        _first(
            _jsonld_image(jsonld),
            og.get("og:image"),
            _safe_str(hero.get("src")) if hero else None,
        ),
        url,
    )

    # ---- venue ----
    venue = _first(
        _jsonld_location(jsonld),
        _short_text(_find_content(body, chrome, class_=_VENUE_CLASS_RE)),
    )

    # ---- tickets ----
    ticket_link = None
    for a in body.find_all("a", href=True):
        href = _safe_str(a.get("href"))
        if any(marker in href for marker in rules.ticket_link_markers) and not _in_chrome(a, chrome):
            ticket_link = href
            break
    tickets = _resolve(_first(_jsonld_offer_url(jsonld), ticket_link), url)

    info = EventInfo(
        title=title,
        image=image,
        venue=venue,
        tickets=tickets,
        canonical_url=_extract_canonical(document, og, url),
        **_extract_dates(document, jsonld, chrome),
    )
    logger.debug("Extracted event fields %s from %s", sorted(info.as_mapping()), url)
    return info
