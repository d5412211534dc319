"""Host-side text buffer that the frob engine reads and mutates."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from .models import Hint, HintKind, Span

logger = logging.getLogger(__name__)


class Document(Protocol):
    """What the engine needs from a host editor buffer."""

    @property
    def text(self) -> str: ...

    def replace(self, start: int, end: int, text: str) -> Span: ...

    def tag(self, span: Span, kind: HintKind) -> None: ...


class TextDocument:
    """In-memory buffer with span-attached rendering hints.

    Hints behave like text properties: replacing a region drops the hints
    that overlap it and shifts the hints that follow it.
    """

    def __init__(self, text: str = "") -> None:
        self._text = text
        self._hints: list[Hint] = []
        self.modified = False

    @classmethod
    def from_path(cls, path: Path) -> "TextDocument":
        with Path(path).open(encoding="utf-8", newline="") as handle:
            return cls(handle.read())

    def save(self, path: Path) -> None:
        with Path(path).open("w", encoding="utf-8", newline="") as handle:
            handle.write(self._text)
        self.modified = False
        logger.debug("Saved %d characters to %s", len(self._text), path)

    @property
    def text(self) -> str:
        return self._text

    @property
    def hints(self) -> list[Hint]:
        return list(self._hints)

    def hints_at(self, position: int) -> set[HintKind]:
        return {
            hint.kind
            for hint in self._hints
            if hint.span.start <= position < hint.span.end
        }

    def replace(self, start: int, end: int, text: str) -> Span:
        if not 0 <= start <= end <= len(self._text):
            raise ValueError(f"Invalid span [{start}, {end}) for document of length {len(self._text)}")
        self._text = self._text[:start] + text + self._text[end:]
        delta = len(text) - (end - start)
        kept: list[Hint] = []
        for hint in self._hints:
            if hint.span.end <= start:
                kept.append(hint)
            elif hint.span.start >= end:
                kept.append(
                    Hint(Span(hint.span.start + delta, hint.span.end + delta), hint.kind)
                )
        self._hints = kept
        self.modified = True
        return Span(start, start + len(text))

    def insert(self, position: int, text: str) -> Span:
        return self.replace(position, position, text)

    def tag(self, span: Span, kind: HintKind) -> None:
        hint = Hint(Span(*span), kind)
        if hint not in self._hints:
            self._hints.append(hint)

    def clear_hints(self) -> None:
        self._hints.clear()
