"""Indentation-delimited class body ranges and enclosing-class lookup.

The heuristic counts leading spaces only. Tab-indented sources are outside
its guarantee: a tab counts as content, so a tab-indented body line ends the
class at once.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass

from parse.patterns import CLASS_HEADER


@dataclass(frozen=True)
class ClassRange:
    """Where a class header sits and which offsets its body covers.

    The body is the half-open interval ``[body_start, body_end)``, starting
    at the line after the header.
    """

    name: str
    header_start: int
    name_start: int
    body_start: int
    body_end: int
    indent: int

    def contains(self, offset: int) -> bool:
        return self.body_start <= offset < self.body_end


def _leading_spaces(text: str, line_start: int) -> int:
    pos = line_start
    while pos < len(text) and text[pos] == " ":
        pos += 1
    return pos - line_start


def _is_blank_or_comment(text: str, content_start: int) -> bool:
    return content_start >= len(text) or text[content_start] in "\n\r#"


def find_class_end(text: str, header_start: int) -> int:
    """Offset where the class whose header starts at ``header_start`` ends.

    The header line's leading-space count is the class indent. The body ends
    at the start of the first later line that is neither blank nor a comment
    and is indented no deeper than the header; without one it runs to the
    end of the text.
    """
    header_line_start = text.rfind("\n", 0, header_start) + 1
    indent = _leading_spaces(text, header_line_start)

    newline = text.find("\n", header_start)
    if newline == -1:
        return len(text)

    pos = newline + 1
    while pos < len(text):
        current_indent = _leading_spaces(text, pos)
        if not _is_blank_or_comment(text, pos + current_indent):
            if current_indent <= indent:
                return pos
        newline = text.find("\n", pos)
        if newline == -1:
            return len(text)
        pos = newline + 1

    return len(text)


def find_class_ranges(text: str) -> list[ClassRange]:
    """Every class header in ``text`` with its computed body range.

    Private (underscore-prefixed) classes are included; they bound scopes
    even though they are not offered as symbols.
    """
    ranges: list[ClassRange] = []
    for match in CLASS_HEADER.finditer(text):
        header_start = match.start()
        header_line_start = text.rfind("\n", 0, header_start) + 1
        newline = text.find("\n", header_start)
        body_start = len(text) if newline == -1 else newline + 1
        body_end = find_class_end(text, header_start)
        ranges.append(
            ClassRange(
                name=match.group(1),
                header_start=header_start,
                name_start=match.start(1),
                body_start=min(body_start, body_end),
                body_end=body_end,
                indent=_leading_spaces(text, header_line_start),
            )
        )
    return ranges


class ScopeResolver:
    """Answers "which class body encloses this offset" for one text.

    Class ranges are computed once and kept sorted by header position, so a
    lookup is a binary search plus a short backwards walk over the classes
    that start before the offset.
    """

    def __init__(self, text: str) -> None:
        self._ranges = find_class_ranges(text)
        self._starts = [r.header_start for r in self._ranges]

    @property
    def ranges(self) -> tuple[ClassRange, ...]:
        return tuple(self._ranges)

    def range_for(self, offset: int) -> ClassRange | None:
        """Innermost class range whose body contains ``offset``."""
        idx = bisect_right(self._starts, offset) - 1
        while idx >= 0:
            candidate = self._ranges[idx]
            if candidate.contains(offset):
                return candidate
            idx -= 1
        return None

    def class_for(self, offset: int) -> str:
        """Name of the enclosing class, or an empty string at module level."""
        found = self.range_for(offset)
        return found.name if found is not None else ""


__all__ = ["ClassRange", "ScopeResolver", "find_class_end", "find_class_ranges"]
