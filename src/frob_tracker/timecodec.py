"""Conversions between durations, timestamps and their text encodings."""

from __future__ import annotations

import math
from decimal import Decimal


def format_duration(seconds: float) -> str:
    """Render ``seconds`` as ``H:MM:SS``, truncating any fraction."""
    total_seconds = math.floor(seconds)
    hours = total_seconds // 3600
    minutes = (total_seconds // 60) % 60
    secs = total_seconds % 60
    return f"{hours}:{minutes:02d}:{secs:02d}"


def duration_from_parts(hours: int, minutes: int, seconds: int) -> int:
    return seconds + 60 * (minutes + 60 * hours)


def format_timestamp(timestamp: float) -> str:
    """Render an activation timestamp so that :func:`parse_timestamp` inverts it.

    Whole-second values are plain digit runs. Fractional values keep the
    shortest decimal text that reproduces the float, in positional notation.
    """
    if float(timestamp).is_integer():
        return str(int(timestamp))
    return format(Decimal(repr(float(timestamp))), "f")


def parse_timestamp(text: str) -> float:
    return float(text)
