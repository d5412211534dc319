"""Host-facing operations bound to one document and one clock."""

from __future__ import annotations

import logging
from typing import Optional

from .config import TrackerSettings
from .document import TextDocument
from .driver import iter_frobs
from .frobs import insert_frob, reconcile_on_load, toggle_at_cursor
from .models import Frob, Span, TotalsResult
from .ranges import resolve_range
from .reporting import compute_totals, format_totals

logger = logging.getLogger(__name__)


class FrobTracker:
    """Apply frob commands to a ``TextDocument`` using configured defaults."""

    def __init__(self, document: TextDocument, settings: Optional[TrackerSettings] = None) -> None:
        self.document = document
        self.settings = settings or TrackerSettings()

    def now(self) -> float:
        return self.settings.clock()

    def toggle(self, position: int, exclusive: Optional[bool] = None) -> Frob:
        if exclusive is None:
            exclusive = self.settings.exclusive
        return toggle_at_cursor(
            self.document, position, exclusive=exclusive, now=self.now()
        )

    def insert(self, position: int) -> Frob:
        return insert_frob(
            self.document, position, trailing_space=self.settings.trailing_space
        )

    def reconcile(self) -> int:
        return reconcile_on_load(self.document)

    def frobs(self) -> list[Frob]:
        return list(iter_frobs(self.document.text))

    def active_frobs(self) -> list[Frob]:
        return [frob for frob in self.frobs() if frob.is_active]

    def range_for(
        self,
        scope: str = "document",
        position: int = 0,
        start: Optional[int] = None,
        end: Optional[int] = None,
    ) -> Span:
        return resolve_range(self.document.text, scope, position, start, end)

    def totals(self, span: Span) -> TotalsResult:
        return compute_totals(self.document, span.start, span.end, self.now())

    def describe_totals(self, span: Span) -> str:
        rendered = format_totals(self.totals(span))
        logger.debug("Totals for %s: %s", span, rendered)
        return rendered
