"""Activation state machine for frobs."""

from __future__ import annotations

import dataclasses
import logging

from .document import Document
from .driver import (
    find_nearest_frob_at_or_before,
    iter_frobs,
    new_frob_at,
    rewrite,
    scan_frobs,
)
from .errors import NegativeDuration
from .models import Frob, HintKind

logger = logging.getLogger(__name__)


def activate(document: Document, frob: Frob, now: float) -> Frob:
    if frob.is_active:
        return frob
    logger.info("Activating frob at %d", frob.span.start)
    return rewrite(document, dataclasses.replace(frob, active_since=now))


def deactivate(document: Document, frob: Frob, now: float) -> Frob:
    if frob.active_since is None:
        return frob
    elapsed = now - frob.active_since
    if elapsed < 0:
        logger.warning(
            "Clock went backwards for frob at %d; applying %.3f seconds",
            frob.span.start,
            elapsed,
        )
    logger.info("Deactivating frob at %d after %.3f seconds", frob.span.start, elapsed)
    return rewrite(
        document,
        dataclasses.replace(
            frob,
            accumulated_seconds=frob.accumulated_seconds + elapsed,
            active_since=None,
            start_span=None,
        ),
    )


def deactivate_all(document: Document, now: float) -> int:
    """Deactivate every active frob in the document; return how many.

    Raises ``NegativeDuration`` before any rewrite when one of the frobs
    would end up below zero.
    """
    for frob in iter_frobs(document.text):
        if frob.elapsed(now) < 0:
            raise NegativeDuration(frob.span.start, frob.elapsed(now))

    deactivated = 0

    def _visit(frob: Frob) -> Frob:
        nonlocal deactivated
        if not frob.is_active:
            return frob
        deactivated += 1
        return deactivate(document, frob, now)

    scan_frobs(document, 0, len(document.text), _visit)
    return deactivated


def toggle_at_cursor(
    document: Document, position: int, *, exclusive: bool, now: float
) -> Frob:
    """Toggle the frob at or before ``position`` and return its new state.

    With ``exclusive`` set, every other active frob is stopped before the
    target starts. Raises ``NoFrobFound`` before touching the document when
    there is nothing to toggle.
    """
    target = find_nearest_frob_at_or_before(document.text, position)
    if target.is_active:
        return deactivate(document, target, now)

    if exclusive:
        ordinal = sum(
            1 for frob in iter_frobs(document.text, 0, target.span.start)
        )
        stopped = deactivate_all(document, now)
        if stopped:
            # Spans before the target may have shrunk; find it again by rank.
            for index, frob in enumerate(iter_frobs(document.text)):
                if index == ordinal:
                    target = frob
                    break
            logger.debug("Stopped %d active frob(s) before activation", stopped)
    return activate(document, target, now)


def reconcile_on_load(document: Document) -> int:
    """Re-apply rendering hints to active frobs without touching the text."""
    active = 0
    for frob in iter_frobs(document.text):
        if not frob.is_active:
            continue
        active += 1
        document.tag(frob.span, HintKind.ACTIVE_STYLE)
        if frob.start_span is not None:
            document.tag(frob.start_span, HintKind.HIDDEN)
    logger.debug("Reconciled %d active frob(s)", active)
    return active


def insert_frob(document: Document, position: int, *, trailing_space: bool = True) -> Frob:
    """Materialize a fresh zero frob at ``position``."""
    frob = rewrite(document, new_frob_at(position))
    if trailing_space:
        document.replace(frob.span.end, frob.span.end, " ")
    logger.info("Inserted frob at %d", frob.span.start)
    return frob
