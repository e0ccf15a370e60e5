"""Position queries over the latest published symbol records."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from artifacts.models.symbols import EMPTY_SYMBOL, SymbolKind, SymbolRecord
from parse.extractor import find_symbol_at
from utils import LineIndex

if TYPE_CHECKING:
    from parse.extractor import SymbolExtractor

_WORD = re.compile(r"[A-Za-z0-9_]+")


def word_at(text: str, line: int, column: int) -> str:
    """Identifier touching the 1-based ``(line, column)`` position.

    A position just past the end of a word still selects it, the way an
    editor caret after the last character does.
    """
    lines = text.split("\n")
    if not 1 <= line <= len(lines):
        return ""
    line_text = lines[line - 1]
    index = column - 1
    for match in _WORD.finditer(line_text):
        if match.start() <= index <= match.end():
            return match.group()
    return ""


class PositionLocator:
    """Holds the most recent position list and answers lookups against it."""

    def __init__(self, extractor: SymbolExtractor | None = None) -> None:
        self._positions: tuple[SymbolRecord, ...] = ()
        self._extractor: SymbolExtractor | None = None
        if extractor is not None:
            self.attach(extractor)

    def attach(self, extractor: SymbolExtractor) -> None:
        self.detach()
        self._extractor = extractor
        extractor.positions_changed.subscribe(self._on_positions_changed)
        self._positions = tuple(extractor.symbols_info())

    def detach(self) -> None:
        if self._extractor is not None:
            self._extractor.positions_changed.unsubscribe(self._on_positions_changed)
            self._extractor = None
        self._positions = ()

    def _on_positions_changed(self, positions: tuple[SymbolRecord, ...]) -> None:
        self._positions = positions

    @property
    def positions(self) -> tuple[SymbolRecord, ...]:
        return self._positions

    def symbol_at(self, line: int, column: int) -> SymbolRecord:
        return find_symbol_at(self._positions, line, column)

    def definition_of(self, name: str) -> SymbolRecord:
        """First non-keyword record named ``name``, or the empty record."""
        if not name:
            return EMPTY_SYMBOL
        for record in self._positions:
            if record.name == name and record.kind is not SymbolKind.KEYWORD:
                return record
        return EMPTY_SYMBOL

    def definition_at(self, text: str, line: int, column: int) -> SymbolRecord:
        """Definition of the identifier under ``(line, column)`` in ``text``."""
        return self.definition_of(word_at(text, line, column))

    def definition_offset(self, text: str, record: SymbolRecord) -> int:
        """Character offset of ``record`` in ``text``; -1 for the empty record."""
        if record.is_empty:
            return -1
        return LineIndex(text).offset(record.line, record.column)


__all__ = ["PositionLocator", "word_at"]
