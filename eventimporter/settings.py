"""Default import rules for eventimporter.

Every value here can be overridden per page through the ``params`` mapping
handed to :func:`eventimporter.importer.transform_dom` (see
:class:`eventimporter.items.ImportRules`).
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Page classification
# ---------------------------------------------------------------------------
# A page is an event page when its URL contains any of these substrings.
EVENT_URL_MARKERS: tuple[str, ...] = (
    "/schedule-of-events/",
    "/events-and-promotions/",
)

# ---------------------------------------------------------------------------
# Noise stripping
# ---------------------------------------------------------------------------
NOISE_SELECTORS: tuple[str, ...] = (
    "header",
    "footer",
    "nav",
    ".header",
    ".footer",
    ".navigation",
    ".breadcrumb",
    "script",
    "noscript",
    "style",
)

# ---------------------------------------------------------------------------
# Paragraph filtering
# ---------------------------------------------------------------------------
PARAGRAPH_MIN_LENGTH = 50

# Matched case-insensitively against the trimmed paragraph text.
PARAGRAPH_EXCLUDE_PATTERN = r"^(on-sale|view|purchase|at\s+[A-Z])"

# Paragraphs linking to any of these hosts are ticketing chrome.
TICKET_LINK_MARKERS: tuple[str, ...] = ("ticketmaster",)

# ---------------------------------------------------------------------------
# Section building
# ---------------------------------------------------------------------------
HERO_IMAGE_SELECTOR = 'img[alt]:not([alt=""]), img[src*="media_"]'

DISCLAIMER_FRAGMENT = "/fragments/event-disclaimers"

HERO_BLOCK_NAME = "Hero"
SECTION_METADATA_BLOCK_NAME = "Section Metadata"
METADATA_BLOCK_NAME = "Metadata"

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"

# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------
OUTPUT_DIR = "./out"
OUTPUT_SUFFIX = ".plain.html"
