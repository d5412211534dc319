"""Range boundaries for plain-text documents: whole buffer, page, section."""

from __future__ import annotations

import re
from typing import Optional

from .models import Span

PAGE_DELIMITER = "\f"

# Org-style "* Heading" or markdown-style "# Heading" at the start of a line.
_HEADLINE_PATTERN = re.compile(r"^(?:\*+|#+)[ \t]", re.MULTILINE)

SCOPES = ("document", "page", "section", "region")


def document_range(text: str) -> Span:
    return Span(0, len(text))


def page_range(text: str, position: int) -> Span:
    """The form-feed delimited page containing ``position``."""
    position = _clamp(position, len(text))
    start = text.rfind(PAGE_DELIMITER, 0, position)
    start = 0 if start < 0 else start + 1
    end = text.find(PAGE_DELIMITER, position)
    return Span(start, len(text) if end < 0 else end)


def section_range(text: str, position: int) -> Span:
    """The headline section containing ``position``.

    A section runs from its headline to the next headline of any level.
    Text before the first headline forms its own section.
    """
    position = _clamp(position, len(text))
    start = 0
    end = len(text)
    for match in _HEADLINE_PATTERN.finditer(text):
        if match.start() <= position:
            start = match.start()
        else:
            end = match.start()
            break
    return Span(start, end)


def line_offset(text: str, line: int) -> int:
    """Offset of the first character of the 1-based ``line``."""
    if line < 1:
        raise ValueError(f"Line numbers start at 1, got {line}")
    offset = 0
    for _ in range(line - 1):
        newline = text.find("\n", offset)
        if newline < 0:
            raise ValueError(f"Line {line} is past the end of the document")
        offset = newline + 1
    return offset


def resolve_range(
    text: str,
    scope: str,
    position: int = 0,
    start: Optional[int] = None,
    end: Optional[int] = None,
) -> Span:
    if scope == "document":
        return document_range(text)
    if scope == "page":
        return page_range(text, position)
    if scope == "section":
        return section_range(text, position)
    if scope == "region":
        if start is None or end is None:
            raise ValueError("A region needs both a start and an end")
        low, high = sorted((_clamp(start, len(text)), _clamp(end, len(text))))
        return Span(low, high)
    raise ValueError(f"Unknown range scope {scope!r}; expected one of {', '.join(SCOPES)}")


def _clamp(value: int, length: int) -> int:
    return max(0, min(value, length))
