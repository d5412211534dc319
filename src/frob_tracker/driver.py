"""Locate frobs in a document and rewrite them in place.

Offsets held by a caller are only valid until the next mutation. ``rewrite``
returns the authoritative spans of the text it produced; anything at or after
the rewritten span has to be re-derived from the returned value or by
scanning again.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Callable, Iterator, Optional

from .document import Document
from .errors import MalformedFrob, NegativeDuration, NoFrobFound
from .grammar import looking_at_frob, search_frob
from .models import Frob, HintKind, Span
from .timecodec import format_duration, format_timestamp

logger = logging.getLogger(__name__)


def encode_frob(accumulated_seconds: float, active_since: Optional[float]) -> str:
    """Canonical text for a frob in the given state."""
    encoded = format_duration(accumulated_seconds)
    if active_since is not None:
        encoded += " " + format_timestamp(active_since)
    return f"[{encoded}]"


def rewrite(document: Document, frob: Frob) -> Frob:
    """Replace the text at ``frob.span`` with the frob's canonical encoding.

    The encoding is checked against the frob grammar before the document is
    touched. The returned frob keeps the logical time values of ``frob`` and
    the spans of the inserted text.
    """
    if frob.accumulated_seconds < 0:
        raise NegativeDuration(frob.span.start, frob.accumulated_seconds)
    encoded = encode_frob(frob.accumulated_seconds, frob.active_since)
    parsed = looking_at_frob(encoded, 0)
    if parsed is None or parsed.span.end != len(encoded):
        raise MalformedFrob(frob.span.start)

    inserted = document.replace(frob.span.start, frob.span.end, encoded)
    rewritten = dataclasses.replace(
        frob,
        span=_shift(parsed.span, inserted.start),
        start_span=(
            _shift(parsed.start_span, inserted.start)
            if parsed.start_span is not None
            else None
        ),
    )
    if rewritten.is_active:
        document.tag(rewritten.span, HintKind.ACTIVE_STYLE)
    if rewritten.start_span is not None:
        document.tag(rewritten.start_span, HintKind.HIDDEN)
    logger.debug("Rewrote frob %s -> %s as %r", frob.span, rewritten.span, encoded)
    return rewritten


def _shift(span: Span, offset: int) -> Span:
    return Span(span.start + offset, span.end + offset)


def new_frob_at(position: int) -> Frob:
    """A zero, inactive frob with an empty span, ready to pass to ``rewrite``."""
    return Frob(
        accumulated_seconds=0.0,
        active_since=None,
        span=Span(position, position),
    )


def find_nearest_frob_at_or_before(text: str, position: int) -> Frob:
    """Return the frob starting at ``position`` or the closest one before it."""
    frob = looking_at_frob(text, position)
    if frob is not None:
        return frob
    bracket = text.rfind("[", 0, position)
    while bracket >= 0:
        frob = looking_at_frob(text, bracket)
        if frob is not None:
            return frob
        bracket = text.rfind("[", 0, bracket)
    raise NoFrobFound(position)


def iter_frobs(text: str, start: int = 0, end: Optional[int] = None) -> Iterator[Frob]:
    """Yield frobs lying entirely within ``[start, end)`` of a fixed text."""
    limit = len(text) if end is None else end
    position = start
    while True:
        frob = search_frob(text, position, limit)
        if frob is None:
            return
        yield frob
        position = frob.span.end


def scan_frobs(
    document: Document,
    start: int,
    end: int,
    visit: Callable[[Frob], Frob],
) -> None:
    """Visit every frob in ``[start, end)`` left to right.

    ``visit`` returns the frob now occupying the visited place, which may be
    a rewritten one with a different length. The scan resumes after the
    returned span and moves ``end`` by the change in length.
    """
    position = start
    limit = end
    while position <= limit:
        frob = search_frob(document.text, position, limit)
        if frob is None:
            break
        result = visit(frob)
        limit += result.span.length - frob.span.length
        position = result.span.end
