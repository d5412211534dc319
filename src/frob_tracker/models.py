"""Domain models for frobs, estimates and rendering hints."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple, Optional


class Span(NamedTuple):
    """Half-open ``[start, end)`` range of text offsets."""

    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start


class HintKind(str, Enum):
    """Rendering hints the host display layer understands."""

    ACTIVE_STYLE = "active-style"
    HIDDEN = "hidden"


class Hint(NamedTuple):
    span: Span
    kind: HintKind


@dataclass(frozen=True, slots=True)
class Frob:
    """A task-time marker embedded in the document text.

    ``span`` bounds the whole bracketed encoding; ``start_span`` bounds the
    activation timestamp text and is present only while the frob is active.
    Values are never updated in place: a rewrite produces a new ``Frob``.
    """

    accumulated_seconds: float
    active_since: Optional[float]
    span: Span
    start_span: Optional[Span] = None

    @property
    def is_active(self) -> bool:
        return self.active_since is not None

    def elapsed(self, now: float) -> float:
        """Banked time plus the live time of the current activation."""
        if self.active_since is None:
            return self.accumulated_seconds
        return self.accumulated_seconds + (now - self.active_since)


@dataclass(frozen=True, slots=True)
class Estimate:
    """Read-only annotation of an expected duration."""

    category: Optional[str]
    duration_seconds: float


@dataclass(slots=True)
class TotalsResult:
    frob_total_seconds: float = 0.0
    estimates_by_category: dict[Optional[str], float] = field(default_factory=dict)
