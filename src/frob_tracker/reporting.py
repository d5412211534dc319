"""Totals over frobs and estimates, and console reporting."""

from __future__ import annotations

from typing import Iterable, Optional

from .document import Document, TextDocument
from .driver import scan_frobs
from .grammar import iter_estimates
from .models import Estimate, Frob, HintKind, TotalsResult
from .timecodec import format_duration


def compute_totals(document: Document, start: int, end: int, now: float) -> TotalsResult:
    """Total frob time and grouped estimates for ``[start, end)``.

    Active frobs contribute their live elapsed time. The document is only
    read.
    """
    result = TotalsResult()

    def _add(frob: Frob) -> Frob:
        result.frob_total_seconds += frob.elapsed(now)
        return frob

    scan_frobs(document, start, end, _add)
    result.estimates_by_category = group_estimates(iter_estimates(document.text, start, end))
    return result


def group_estimates(estimates: Iterable[Estimate]) -> dict[Optional[str], float]:
    totals: dict[Optional[str], float] = {}
    for estimate in estimates:
        totals[estimate.category] = (
            totals.get(estimate.category, 0.0) + estimate.duration_seconds
        )
    return totals


def format_totals(result: TotalsResult) -> str:
    rendered = format_duration(result.frob_total_seconds)
    if not result.estimates_by_category:
        return rendered
    groups = []
    for category, seconds in result.estimates_by_category.items():
        label = f"{format_duration(seconds)} estimated"
        if category is not None:
            label += f" {category}"
        groups.append(label)
    return f"{rendered} ({'; '.join(groups)})"


class TotalsPrinter:
    """Render frob listings and totals in the console."""

    def __init__(self, document: TextDocument) -> None:
        self.document = document

    def print_totals(self, start: int, end: int, now: float) -> None:
        print(format_totals(compute_totals(self.document, start, end, now)))

    def print_frobs(self, frobs: Iterable[Frob], now: float) -> None:
        frobs = list(frobs)
        if not frobs:
            print("No frobs in document.")
            return

        print(f"{'Span':<16} {'State':<8} {'Elapsed':>10}  Hints")
        print("-" * 48)
        for frob in frobs:
            state = "active" if frob.is_active else "idle"
            hints = sorted(kind.value for kind in self.document.hints_at(frob.span.start))
            if frob.start_span is not None and HintKind.HIDDEN in self.document.hints_at(
                frob.start_span.start
            ):
                hints.append(HintKind.HIDDEN.value)
            span = f"{frob.span.start}-{frob.span.end}"
            print(
                f"{span:<16} {state:<8} {format_duration(frob.elapsed(now)):>10}  "
                f"{', '.join(hints) or '-'}"
            )
