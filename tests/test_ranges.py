"""Tests for plain-text range boundaries."""

from __future__ import annotations

import pytest

from frob_tracker.models import Span
from frob_tracker.ranges import (
    document_range,
    line_offset,
    page_range,
    resolve_range,
    section_range,
)

SECTIONS = "preamble\n* One\n[0:00:01]\n** Two\n[0:00:02]\n# Three\n[0:00:03]\n"


def test_document_range():
    assert document_range("abc") == Span(0, 3)


def test_page_range_uses_form_feeds():
    text = "page one\fpage two\fpage three"
    assert page_range(text, 0) == Span(0, 8)
    assert page_range(text, 10) == Span(9, 17)
    assert page_range(text, len(text)) == Span(18, len(text))


def test_page_range_without_delimiters_is_whole_text():
    assert page_range("just text", 4) == Span(0, 9)


def test_section_range_before_first_headline():
    assert section_range(SECTIONS, 2) == Span(0, SECTIONS.index("* One"))


def test_section_range_stops_at_next_headline_of_any_level():
    start = SECTIONS.index("* One")
    assert section_range(SECTIONS, start + 3) == Span(start, SECTIONS.index("** Two"))


def test_section_range_markdown_heading_runs_to_end():
    start = SECTIONS.index("# Three")
    assert section_range(SECTIONS, len(SECTIONS)) == Span(start, len(SECTIONS))


def test_line_offset():
    assert line_offset(SECTIONS, 1) == 0
    assert line_offset(SECTIONS, 3) == SECTIONS.index("[0:00:01]")
    with pytest.raises(ValueError):
        line_offset(SECTIONS, 0)
    with pytest.raises(ValueError):
        line_offset("one line", 3)


class TestResolveRange:
    def test_region_is_ordered_and_clamped(self):
        assert resolve_range("abcdef", "region", start=10, end=2) == Span(2, 6)

    def test_region_requires_bounds(self):
        with pytest.raises(ValueError):
            resolve_range("abc", "region", start=1)

    def test_unknown_scope(self):
        with pytest.raises(ValueError, match="Unknown range scope"):
            resolve_range("abc", "chapter")

    def test_section_scope(self):
        start = SECTIONS.index("** Two")
        assert resolve_range(SECTIONS, "section", start) == Span(
            start, SECTIONS.index("# Three")
        )
