"""eventimporter.importer - page transform entry points.

``transform_dom`` and ``generate_document_path`` follow the importer
contract: they receive an already-parsed document plus its URL and hand back
the root element to convert and the path of the resulting document.

Basic usage::

    from bs4 import BeautifulSoup
    from eventimporter import transform_dom, generate_document_path

    soup = BeautifulSoup(html, "lxml")
    root = transform_dom(soup, url, html)
    path = generate_document_path(soup, url)

Or, starting from raw HTML::

    from eventimporter import transform_html

    result = transform_html(html, "https://example.com/schedule-of-events/gala")
    print(result.path, result.info)
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from typing import Any, NamedTuple
from urllib.parse import urlparse

from bs4 import BeautifulSoup, Tag

from eventimporter.extractors.classify import is_event_url
from eventimporter.extractors.event_info import extract_event_info
from eventimporter.extractors.noise import strip_noise
from eventimporter.extractors.paragraphs import select_paragraphs
from eventimporter.items import ImportRules
from eventimporter.plugins import get_transformers
from eventimporter.sections import (
    build_disclaimer_section,
    build_hero_section,
    create_metadata,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Public exception / result
# ---------------------------------------------------------------------------

class PageImportError(RuntimeError):
    """Raised when raw HTML cannot be turned into an importable document.

    Attributes:
        url -- the page URL that failed
    """

    def __init__(self, message: str, url: str = "") -> None:
        super().__init__(message)
        self.url = url


class ImportResult(NamedTuple):
    url: str
    path: str
    root: Tag | None
    is_event: bool
    info: dict[str, str]

    def to_html(self) -> str:
        return str(self.root) if self.root is not None else ""


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

def _transform_event(
    document: BeautifulSoup,
    url: str,
    rules: ImportRules,
) -> tuple[Tag, dict[str, str]]:
    # Extraction reads the untouched page (JSON-LD lives in <script>).
    info = extract_event_info(document, url, rules).as_mapping()

    strip_noise(document, rules.noise_selectors)
    main = document.body

    selection = select_paragraphs(main, rules)
    hero = build_hero_section(
        document, main, selection.paragraphs, rules.hero_image_selector,
    )
    disclaimer = build_disclaimer_section(document, rules.disclaimer_fragment)

    main.clear()
    main.append(hero)
    main.append(disclaimer)

    create_metadata(main, document, info, selection.lead)

    if selection.lead is not None:
        info["description"] = selection.lead.get_text().strip()
    logger.info(
        "Rebuilt event page %s (%d paragraph(s), %d metadata field(s))",
        url, len(selection.paragraphs), len(info),
    )
    return main, info


def _run_plugins(document: BeautifulSoup, url: str, params: dict[str, Any]) -> Tag | None:
    # Each plugin works on its own copy; a failure leaves the page untouched.
    for plugin in get_transformers():
        try:
            if not plugin.can_transform(url):
                continue
            root = plugin.transform(copy.copy(document), url, params)
        except Exception as exc:
            logger.warning("Transformer plugin %s failed on %s: %s", plugin.name, url, exc)
            continue
        if root is not None:
            logger.debug("Transformer plugin %s handled %s", plugin.name, url)
            return root
    return None


def _transform(
    document: BeautifulSoup,
    url: str,
    params: Mapping[str, Any] | None,
) -> tuple[Tag | None, bool, dict[str, str]]:
    params = dict(params or {})
    rules = ImportRules.from_params(params)

    root = _run_plugins(document, url, params)
    if root is not None:
        return root, False, {}

    if not is_event_url(url, rules.event_url_markers):
        logger.debug("Not an event page, passing through: %s", url)
        return document.body, False, {}

    root, info = _transform_event(document, url, rules)
    return root, True, info


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def transform_dom(
    document: BeautifulSoup,
    url: str,
    html: str = "",
    params: Mapping[str, Any] | None = None,
) -> Tag | None:
    """Apply DOM operations to *document* and return the root to convert.

    Args:
        document: Parsed page.  Event pages are rebuilt in place.
        url:      URL of the imported page.
        html:     Raw HTML, for reference only; never re-parsed.
        params:   Importer parameters.  Keys naming
                  :class:`~eventimporter.items.ImportRules` fields override
                  the default rules; anything else is ignored.

    Returns:
        ``document.body`` untouched for non-event pages; otherwise the same
        body element holding the hero section, the disclaimer section and
        the metadata block, in that order.
        A registered transformer that claims the URL runs on a copy of
        *document*, and the root it returns belongs to that copy.
    """
    root, _, _ = _transform(document, url, params)
    return root


def generate_document_path(document: BeautifulSoup | None, url: str) -> str:
    """Return the document path for *url*: its path with ``.html`` dropped."""
    path = urlparse(url).path
    if path.endswith(".html"):
        path = path[: -len(".html")]
    return path


def transform_html(
    html: str | bytes,
    url: str,
    params: Mapping[str, Any] | None = None,
) -> ImportResult:
    """Parse *html* and run the full import for a single page.

    Bytes are decoded by BeautifulSoup, which detects the page encoding.

    Raises:
        PageImportError: if the parsed page has no ``<body>``.
    """
    document = BeautifulSoup(html, "lxml")
    if document.body is None:
        raise PageImportError(f"No <body> element in page {url}", url=url)

    path = generate_document_path(document, url)
    root, is_event, info = _transform(document, url, params)
    return ImportResult(url=url, path=path, root=root, is_event=is_event, info=info)
