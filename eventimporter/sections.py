"""Section and block construction for rebuilt event pages.

Sections are built detached from the document and only attached to the
root once complete.  Nodes taken from the page are always copied, never
moved.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable

from bs4 import BeautifulSoup, Tag

from eventimporter.dom import Cell, create_table
from eventimporter.settings import (
    DISCLAIMER_FRAGMENT,
    HERO_BLOCK_NAME,
    HERO_IMAGE_SELECTOR,
    METADATA_BLOCK_NAME,
    SECTION_METADATA_BLOCK_NAME,
)

logger = logging.getLogger(__name__)

# EventInfo field -> metadata block label, in emission order.
METADATA_LABELS: dict[str, str] = {
    "title": "Title",
    "description": "Description",
    "image": "Image",
    "dates": "Dates",
    "start_date": "Start Date",
    "end_date": "End Date",
    "venue": "Venue",
    "tickets": "Tickets",
    "canonical_url": "Canonical URL",
}


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------

def find_hero_image(root: Tag, selector: str = HERO_IMAGE_SELECTOR) -> Tag | None:
    """Return the first image in document order matching *selector*."""
    return root.select_one(selector)


def find_primary_heading(root: Tag) -> Tag | None:
    """Return the first ``h1``, falling back to the first ``h2``."""
    return root.find("h1") or root.find("h2")


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------

def build_hero_section(
    document: BeautifulSoup,
    root: Tag,
    paragraphs: Iterable[Tag],
    image_selector: str = HERO_IMAGE_SELECTOR,
) -> Tag:
    """Build the hero section: image block, title, body copy, alignment."""
    section = document.new_tag("div")

    image = find_hero_image(root, image_selector)
    if image is not None:
        picture = image.find_parent("picture") or image
        content = document.new_tag("div")
        content.append(copy.copy(picture))
        wrapper = document.new_tag("div")
        wrapper.append(content)
        section.append(create_table([[HERO_BLOCK_NAME], [wrapper]], document))

    heading = find_primary_heading(root)
    if heading is not None:
        section.append(copy.copy(heading))

    for p in paragraphs:
        section.append(copy.copy(p))

    section.append(
        create_table(
            [[SECTION_METADATA_BLOCK_NAME], ["text-align", "center"]],
            document,
        ),
    )
    return section


def build_disclaimer_section(
    document: BeautifulSoup,
    fragment: str = DISCLAIMER_FRAGMENT,
) -> Tag:
    """Build the section referencing the shared event-disclaimer fragment."""
    section = document.new_tag("div")
    h3 = document.new_tag("h3")
    link = document.new_tag("a", href=fragment)
    link.string = fragment
    h3.append(link)
    section.append(h3)
    return section


# ---------------------------------------------------------------------------
# Metadata block
# ---------------------------------------------------------------------------

def _metadata_cell(document: BeautifulSoup, key: str, value: str) -> Cell:
    if key == "image":
        return document.new_tag("img", src=value)
    return value


def create_metadata(
    root: Tag,
    document: BeautifulSoup,
    info: dict[str, str],
    lead: Tag | None,
) -> Tag:
    """Append the page metadata block to *root* and return it.

    The description is the lead body paragraph; every other row comes from
    *info*.  Absent values produce no row.
    """
    values = dict(info)
    if lead is not None:
        description = lead.get_text().strip()
        if description:
            values["description"] = description

    rows: list[list[Cell]] = [[METADATA_BLOCK_NAME]]
    for key, label in METADATA_LABELS.items():
        if values.get(key):
            rows.append([label, _metadata_cell(document, key, values[key])])

    block = create_table(rows, document)
    root.append(block)
    logger.debug("Metadata block carries %d field(s)", len(rows) - 1)
    return block
