"""Body paragraph selection for event hero sections.

A ``<p>`` is kept when its trimmed text is long enough, does not open with a
call-to-action phrase, and does not link out to a ticketing site.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from typing import NamedTuple

from bs4 import Tag

from eventimporter.items import ImportRules
from eventimporter.settings import PARAGRAPH_EXCLUDE_PATTERN, PARAGRAPH_MIN_LENGTH

logger = logging.getLogger(__name__)

PARAGRAPH_EXCLUDE_RE = re.compile(PARAGRAPH_EXCLUDE_PATTERN, re.IGNORECASE)


class ParagraphSelection(NamedTuple):
    paragraphs: list[Tag]
    lead: Tag | None


def is_body_text(
    text: str,
    min_length: int = PARAGRAPH_MIN_LENGTH,
    exclude_re: re.Pattern[str] = PARAGRAPH_EXCLUDE_RE,
) -> bool:
    """Return True if *text* reads like body copy rather than page chrome."""
    text = text.strip()
    return len(text) > min_length and not exclude_re.match(text)


def links_to_any(tag: Tag, markers: Iterable[str]) -> bool:
    """Return True if any ``<a href>`` under *tag* contains one of *markers*."""
    for a in tag.find_all("a", href=True):
        href = str(a.get("href") or "")
        if any(marker in href for marker in markers):
            return True
    return False


def select_paragraphs(root: Tag, rules: ImportRules | None = None) -> ParagraphSelection:
    """Return the body paragraphs under *root*, in document order."""
    rules = rules or ImportRules()
    exclude_re = rules.paragraph_exclude_re

    kept: list[Tag] = []
    for p in root.find_all("p"):
        if not is_body_text(p.get_text(), rules.paragraph_min_length, exclude_re):
            continue
        if links_to_any(p, rules.ticket_link_markers):
            continue
        kept.append(p)

    logger.debug("Retained %d body paragraph(s)", len(kept))
    return ParagraphSelection(paragraphs=kept, lead=kept[0] if kept else None)
