"""Errors raised by the frob engine."""

from __future__ import annotations


class FrobError(Exception):
    """Base class for frob parsing and lookup failures."""

    def __init__(self, message: str, position: int) -> None:
        super().__init__(message)
        self.position = position


class MalformedFrob(FrobError):
    """Text at an expected frob start does not match the frob grammar."""

    def __init__(self, position: int) -> None:
        super().__init__(f"Malformed frob at position {position}", position)


class NoFrobFound(FrobError):
    """No frob exists at or before the queried position."""

    def __init__(self, position: int) -> None:
        super().__init__(f"No frob found at or before position {position}", position)


class NegativeDuration(MalformedFrob):
    """A frob's banked time went below zero and has no text encoding."""

    def __init__(self, position: int, seconds: float) -> None:
        FrobError.__init__(
            self,
            f"Frob at position {position} would hold {seconds:.3f} seconds; "
            "negative durations cannot be written",
            position,
        )
        self.seconds = seconds
