"""Strip page chrome (navigation, header, footer, non-rendering tags)."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from bs4 import BeautifulSoup

from eventimporter.dom import remove
from eventimporter.settings import NOISE_SELECTORS

logger = logging.getLogger(__name__)


def strip_noise(
    document: BeautifulSoup,
    selectors: Iterable[str] = NOISE_SELECTORS,
) -> int:
    """Remove every element matching *selectors* from the whole *document*.

    Matching is document-wide, so content nodes that happen to carry one of
    the chrome class names (``.header``, ``.footer`` ...) go too.
    """
    selectors = tuple(selectors)
    removed = remove(document, selectors)
    logger.debug("Stripped %d noise element(s) using %d selector(s)", removed, len(selectors))
    return removed
