"""Unit tests for body paragraph selection."""

from __future__ import annotations

import re

from conftest import make_soup
from eventimporter.extractors.paragraphs import (
    is_body_text,
    links_to_any,
    select_paragraphs,
)
from eventimporter.items import ImportRules

PURCHASE_60 = "Purchase tickets now " + "x" * 39
CONCERT_60 = "The concert begins " + "x" * 41


class TestIsBodyText:
    def test_fixture_lengths(self):
        assert len(PURCHASE_60) == 60
        assert len(CONCERT_60) == 60

    def test_purchase_excluded(self):
        assert not is_body_text(PURCHASE_60)

    def test_concert_retained(self):
        assert is_body_text(CONCERT_60)

    def test_exactly_fifty_chars_excluded(self):
        assert not is_body_text("a" * 50)

    def test_fifty_one_chars_retained(self):
        assert is_body_text("a" * 51)

    def test_length_measured_after_trim(self):
        assert not is_body_text("   " + "a" * 50 + "\n\n")

    def test_on_sale_excluded_case_insensitive(self):
        assert not is_body_text("ON-SALE " + "x" * 60)

    def test_view_prefix_excluded(self):
        assert not is_body_text("View the seating chart and accessibility info for this venue.")

    def test_view_prefix_matches_inside_word(self):
        assert not is_body_text("Viewers of all ages are welcome at every performance this summer.")

    def test_at_followed_by_word_excluded(self):
        assert not is_body_text("At The Grand Hall, doors open one hour before the performance.")

    def test_at_lowercase_word_also_excluded(self):
        # IGNORECASE applies to the [A-Z] class as well.
        assert not is_body_text("at noon the doors open for early entry to the members lounge.")

    def test_capitalized_word_then_at_retained(self):
        assert is_body_text("Doors at 7pm, with the headline act on stage around nine o'clock.")

    def test_phrase_mid_text_retained(self):
        assert is_body_text("Members can purchase tickets early by logging into their accounts.")

    def test_custom_pattern(self):
        pattern = re.compile(r"^sponsored", re.IGNORECASE)
        assert not is_body_text("Sponsored " + "x" * 60, exclude_re=pattern)
        assert is_body_text(PURCHASE_60, exclude_re=pattern)

    def test_custom_min_length(self):
        assert is_body_text("short but fine", min_length=5)


class TestLinksToAny:
    def test_matches_substring(self):
        soup = make_soup('<p><a href="https://www.ticketmaster.com/e/1">Buy</a></p>')
        assert links_to_any(soup.p, ["ticketmaster"])

    def test_ignores_other_links(self):
        soup = make_soup('<p><a href="/tickets">Buy</a><a>no href</a></p>')
        assert not links_to_any(soup.p, ["ticketmaster"])


class TestSelectParagraphs:
    def test_purchase_dropped_concert_kept(self):
        soup = make_soup(f"<p>{PURCHASE_60}</p><p>{CONCERT_60}</p>")
        selection = select_paragraphs(soup.body)
        assert [p.get_text() for p in selection.paragraphs] == [CONCERT_60]
        assert selection.lead is selection.paragraphs[0]

    def test_ticketmaster_link_excluded_regardless_of_length(self):
        long_text = "x" * 500
        soup = make_soup(
            f'<p>{long_text} <span><a href="https://concerts.ticketmaster.com/a">t</a></span></p>',
        )
        assert select_paragraphs(soup.body).paragraphs == []

    def test_short_paragraph_never_retained(self):
        soup = make_soup("<p>Tiny.</p><p>" + "b" * 50 + "</p>")
        assert select_paragraphs(soup.body).paragraphs == []

    def test_document_order_preserved(self):
        first = "First paragraph of the story, long enough to be body copy text."
        second = "Second paragraph of the story, also long enough to be body copy."
        soup = make_soup(f"<div><p>{first}</p></div><section><p>{second}</p></section>")
        selection = select_paragraphs(soup.body)
        assert [p.get_text() for p in selection.paragraphs] == [first, second]
        assert selection.lead.get_text() == first

    def test_empty_result_has_no_lead(self):
        soup = make_soup("<div>No paragraphs here at all.</div>")
        selection = select_paragraphs(soup.body)
        assert selection.paragraphs == []
        assert selection.lead is None

    def test_returns_original_nodes(self):
        soup = make_soup(f"<p id='keep'>{CONCERT_60}</p>")
        selection = select_paragraphs(soup.body)
        assert selection.lead is soup.find(id="keep")

    def test_rules_override(self):
        rules = ImportRules(paragraph_min_length=10, ticket_link_markers=["eventbrite"])
        soup = make_soup(
            '<p>Twelve chars</p>'
            '<p>Tickets via <a href="https://eventbrite.com/x">eventbrite</a> only here.</p>'
            '<p>Tickets via <a href="https://ticketmaster.com/x">partner</a> only here.</p>',
        )
        texts = [p.get_text() for p in select_paragraphs(soup.body, rules).paragraphs]
        assert texts == ["Twelve chars", "Tickets via partner only here."]

    def test_event_fixture(self, event_soup):
        texts = [p.get_text().strip() for p in select_paragraphs(event_soup.body).paragraphs]
        assert texts[0].startswith("The Symphony Gala returns")
        assert "Guests are invited to a pre-show reception featuring local wines and small plates." in texts
        assert not any(t.startswith(("On-Sale", "View", "At The", "Buy tickets")) for t in texts)
