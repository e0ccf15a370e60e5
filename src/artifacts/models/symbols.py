"""Symbol models for extracted source symbols.

This module contains the position-indexed record produced by every extractor
variant and the empty sentinel returned by position lookups that miss.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# Schema version constant
SCHEMA_VERSION = 1


class SymbolKind(str, Enum):
    """Category of a positioned symbol."""

    KEYWORD = "keyword"
    CLASS = "class"
    FUNCTION = "function"
    VARIABLE = "variable"
    IMPORT = "import"
    OTHER = "other"


class SymbolRecord(BaseModel):
    """A named, positioned symbol found in a source document.

    Lines and columns are 1-based. A default-constructed record (kind
    ``OTHER``, zero numeric fields, empty strings) is the "not found" value.
    """

    model_config = ConfigDict(frozen=True)

    name: str = ""
    kind: SymbolKind = SymbolKind.OTHER
    line: int = Field(default=0, ge=0)
    column: int = Field(default=0, ge=0)
    length: int = Field(default=0, ge=0)
    scope: str = Field(default="", description="Enclosing class name, if any")
    parameters: str = Field(
        default="", description="Raw parameter text (functions only)"
    )

    @property
    def is_empty(self) -> bool:
        return self == EMPTY_SYMBOL

    def contains(self, line: int, column: int) -> bool:
        """Return True when ``(line, column)`` falls on this symbol's name."""
        return self.line == line and self.column <= column < self.column + self.length


EMPTY_SYMBOL = SymbolRecord()


__all__ = ["EMPTY_SYMBOL", "SCHEMA_VERSION", "SymbolKind", "SymbolRecord"]
