"""Recognize frob and estimate tokens in document text."""

from __future__ import annotations

import re
from typing import Iterator, Optional

from .errors import MalformedFrob
from .models import Estimate, Frob, Span
from .timecodec import duration_from_parts, parse_timestamp

# [H:MM:SS] or [H:MM:SS EPOCH]
FROB_PATTERN = re.compile(r"\[(\d+):(\d+):(\d+)(?: (\d+(?:\.\d+)?))?\]")

# (HH:MM), (:MM), optionally followed by ";", a space and a category
ESTIMATE_PATTERN = re.compile(r"\((\d*):(\d+);? ?([^)]*)\)")


def _frob_from_match(match: re.Match[str]) -> Frob:
    hours, minutes, seconds, epoch = match.groups()
    start_span: Optional[Span] = None
    active_since: Optional[float] = None
    if epoch is not None:
        active_since = parse_timestamp(epoch)
        start_span = Span(match.start(4), match.end(4))
    return Frob(
        accumulated_seconds=float(
            duration_from_parts(int(hours), int(minutes), int(seconds))
        ),
        active_since=active_since,
        span=Span(match.start(), match.end()),
        start_span=start_span,
    )


def _estimate_from_match(match: re.Match[str]) -> Estimate:
    hours, minutes, category = match.groups()
    return Estimate(
        category=category or None,
        duration_seconds=float(int(minutes) * 60 + int(hours or 0) * 3600),
    )


def looking_at_frob(text: str, position: int) -> Optional[Frob]:
    """Return the frob starting exactly at ``position``, if there is one."""
    match = FROB_PATTERN.match(text, position)
    if match is None:
        return None
    return _frob_from_match(match)


def parse_frob_at(text: str, position: int) -> Frob:
    """Parse a frob the caller already expects to start at ``position``."""
    frob = looking_at_frob(text, position)
    if frob is None:
        raise MalformedFrob(position)
    return frob


def search_frob(text: str, position: int, limit: Optional[int] = None) -> Optional[Frob]:
    """Find the next frob lying entirely within ``[position, limit)``."""
    match = FROB_PATTERN.search(text, position, len(text) if limit is None else limit)
    if match is None:
        return None
    return _frob_from_match(match)


def search_estimate(
    text: str, position: int, limit: Optional[int] = None
) -> Optional[tuple[Estimate, Span]]:
    """Find the next estimate lying entirely within ``[position, limit)``."""
    match = ESTIMATE_PATTERN.search(
        text, position, len(text) if limit is None else limit
    )
    if match is None:
        return None
    return _estimate_from_match(match), Span(match.start(), match.end())


def iter_estimates(text: str, start: int = 0, end: Optional[int] = None) -> Iterator[Estimate]:
    limit = len(text) if end is None else end
    for match in ESTIMATE_PATTERN.finditer(text, start, limit):
        yield _estimate_from_match(match)
