"""Model namespace for symlex records."""

from artifacts.models.snapshot import (
    ExtractionSnapshot,
    FileSnapshotRecord,
    FileSymbolRecord,
)
from artifacts.models.symbols import EMPTY_SYMBOL, SymbolKind, SymbolRecord

__all__ = [
    "EMPTY_SYMBOL",
    "ExtractionSnapshot",
    "FileSnapshotRecord",
    "FileSymbolRecord",
    "SymbolKind",
    "SymbolRecord",
]
