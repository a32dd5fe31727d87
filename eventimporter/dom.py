"""Generic DOM helpers shared by page transformers.

Block markup follows the convention downstream document converters expect:
a ``<table>`` whose first row names the block in a single header cell and
whose following rows carry the block content.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from bs4 import BeautifulSoup, NavigableString, Tag

Cell = str | Tag | Sequence[str | Tag] | None


def remove(document: BeautifulSoup | Tag, selectors: Iterable[str]) -> int:
    """Decompose every element of *document* matching any of *selectors*.

    Returns the number of elements removed.  Selectors that match nothing are
    silently skipped.
    """
    removed = 0
    for selector in selectors:
        for el in document.select(selector):
            # A previous selector may already have dropped an ancestor.
            if el.decomposed:
                continue
            el.decompose()
            removed += 1
    return removed


def _fill_cell(cell: Tag, content: Cell) -> None:
    if content is None:
        return
    if isinstance(content, (str, Tag)):
        items: Sequence[str | Tag] = [content]
    else:
        items = content
    for item in items:
        if isinstance(item, Tag):
            cell.append(item)
        else:
            cell.append(NavigableString(str(item)))


def create_table(rows: Sequence[Sequence[Cell]], document: BeautifulSoup) -> Tag:
    """Build a block table from *rows*.

    The first row is the block header: its first cell becomes a ``<th>``
    spanning the widest row.  Every other cell becomes a ``<td>``.
    """
    table = document.new_tag("table")
    width = max((len(row) for row in rows), default=1)

    for index, row in enumerate(rows):
        tr = document.new_tag("tr")
        if index == 0:
            th = document.new_tag("th")
            if width > 1:
                th["colspan"] = str(width)
            _fill_cell(th, row[0] if row else None)
            tr.append(th)
        else:
            for content in row:
                td = document.new_tag("td")
                _fill_cell(td, content)
                tr.append(td)
        table.append(tr)

    return table
