"""Unit tests for the generic DOM helpers."""

from __future__ import annotations

from conftest import make_soup
from eventimporter.dom import create_table, remove


class TestRemove:
    def test_removes_all_matches(self):
        soup = make_soup('<nav>a</nav><div class="x">b</div><nav>c</nav><p>keep</p>')
        removed = remove(soup, ["nav", ".x"])
        assert removed == 3
        assert soup.find("nav") is None
        assert soup.find(class_="x") is None
        assert soup.p.get_text() == "keep"

    def test_no_match_is_not_an_error(self):
        soup = make_soup("<p>keep</p>")
        assert remove(soup, [".missing", "aside"]) == 0
        assert soup.p is not None

    def test_nested_match_counted_once(self):
        soup = make_soup('<header><nav class="navigation">x</nav></header>')
        assert remove(soup, ["header", "nav", ".navigation"]) == 1
        assert soup.body.find_all(True) == []


class TestCreateTable:
    def test_header_spans_widest_row(self):
        soup = make_soup("")
        table = create_table([["Section Metadata"], ["text-align", "center"]], soup)
        th = table.find("th")
        assert th.get_text() == "Section Metadata"
        assert th["colspan"] == "2"
        assert [td.get_text() for td in table.find_all("td")] == ["text-align", "center"]

    def test_single_column_has_no_colspan(self):
        soup = make_soup("")
        table = create_table([["Hero"], ["content"]], soup)
        assert not table.th.has_attr("colspan")

    def test_tag_cells_are_appended(self):
        soup = make_soup("")
        img = soup.new_tag("img", src="/a.png")
        table = create_table([["Hero"], [img]], soup)
        assert table.td.img is img

    def test_list_and_empty_cells(self):
        soup = make_soup("")
        strong = soup.new_tag("strong")
        strong.string = "bold"
        table = create_table([["Block"], [["plain ", strong], None]], soup)
        cells = table.find_all("td")
        assert cells[0].get_text() == "plain bold"
        assert cells[1].get_text() == ""

    def test_rows_in_order(self):
        soup = make_soup("")
        table = create_table([["Metadata"], ["Title", "A"], ["Dates", "B"]], soup)
        rows = table.find_all("tr")
        assert len(rows) == 3
        assert rows[2].td.get_text() == "Dates"
