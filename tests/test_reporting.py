"""Tests for frob and estimate aggregation."""

from __future__ import annotations

from frob_tracker.document import TextDocument
from frob_tracker.grammar import iter_estimates
from frob_tracker.models import TotalsResult
from frob_tracker.reporting import (
    TotalsPrinter,
    compute_totals,
    format_totals,
    group_estimates,
)


def test_totals_over_whole_document():
    document = TextDocument("[2:25:05] a\n[1:12:29] b\n")
    result = compute_totals(document, 0, len(document.text), now=0.0)
    assert result.frob_total_seconds == 13054
    assert result.estimates_by_category == {}
    assert format_totals(result) == "3:37:34"


def test_active_frobs_contribute_live_time_without_rewriting():
    text = "[0:01:00 100] a [0:00:30] b"
    document = TextDocument(text)
    result = compute_totals(document, 0, len(text), now=145.0)
    assert result.frob_total_seconds == 60 + 45 + 30
    assert document.text == text
    assert not document.modified
    assert document.hints == []


def test_split_ranges_are_additive():
    text = "[0:10:00] a [0:05:00 50] b | [1:00:00] c [0:00:07] d"
    document = TextDocument(text)
    split = text.index("|")
    whole = compute_totals(document, 0, len(text), now=80.0)
    left = compute_totals(document, 0, split, now=80.0)
    right = compute_totals(document, split, len(text), now=80.0)
    assert whole.frob_total_seconds == left.frob_total_seconds + right.frob_total_seconds


def test_frobs_straddling_range_edges_are_ignored():
    text = "[0:00:10] [0:00:20]"
    document = TextDocument(text)
    assert compute_totals(document, 1, len(text), now=0.0).frob_total_seconds == 20
    assert compute_totals(document, 0, len(text) - 1, now=0.0).frob_total_seconds == 10


def test_estimates_grouped_by_category_in_first_seen_order():
    document = TextDocument("(01:00) (00:30 x) (00:30 x)")
    result = compute_totals(document, 0, len(document.text), now=0.0)
    assert result.estimates_by_category == {None: 3600, "x": 3600}
    assert list(result.estimates_by_category) == [None, "x"]


def test_group_estimates_keeps_first_seen_order():
    grouped = group_estimates(iter_estimates("(:10 b) (:20 a) (:05 b)"))
    assert list(grouped.items()) == [("b", 900.0), ("a", 1200.0)]


def test_format_totals_with_estimates():
    result = TotalsResult(
        frob_total_seconds=13054,
        estimates_by_category={None: 3600.0, "done": 10800.0},
    )
    assert format_totals(result) == "3:37:34 (1:00:00 estimated; 3:00:00 estimated done)"


def test_printer_lists_frobs(capsys):
    document = TextDocument("[0:00:05] a\n")
    printer = TotalsPrinter(document)
    printer.print_totals(0, len(document.text), now=0.0)
    printer.print_frobs([], now=0.0)
    out = capsys.readouterr().out
    assert "0:00:05" in out
    assert "No frobs in document." in out
