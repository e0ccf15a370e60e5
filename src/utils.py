"""Shared utilities for symlex."""

from __future__ import annotations

from bisect import bisect_right


class LineIndex:
    """Offset to 1-based ``(line, column)`` conversion for one text.

    Line starts are computed once so each lookup is a binary search instead
    of a rescan from the start of the document.

    Examples:
        >>> index = LineIndex("ab\\ncd")
        >>> index.line_column(0)
        (1, 1)
        >>> index.line_column(4)
        (2, 2)
    """

    def __init__(self, text: str) -> None:
        self._length = len(text)
        self._starts = [0]
        pos = text.find("\n")
        while pos != -1:
            self._starts.append(pos + 1)
            pos = text.find("\n", pos + 1)

    def line_column(self, offset: int) -> tuple[int, int]:
        offset = max(0, min(offset, self._length))
        line_idx = bisect_right(self._starts, offset) - 1
        return line_idx + 1, offset - self._starts[line_idx] + 1

    def offset(self, line: int, column: int) -> int:
        """Inverse of :meth:`line_column`, clamped to the text bounds."""
        if line < 1:
            return 0
        if line > len(self._starts):
            return self._length
        return min(self._starts[line - 1] + max(column, 1) - 1, self._length)


def line_and_column(text: str, offset: int) -> tuple[int, int]:
    """Convert a character offset to a 1-based ``(line, column)`` pair."""
    return LineIndex(text).line_column(offset)


def case_insensitive_sorted(items: list[str] | tuple[str, ...]) -> list[str]:
    """Sort case-insensitively; ties keep a stable case-sensitive order."""
    return sorted(items, key=lambda item: (item.casefold(), item))


def unique(items: list[str] | tuple[str, ...]) -> list[str]:
    """Drop repeated strings, keeping the first occurrence order."""
    return list(dict.fromkeys(items))
