"""Built-in symbol tables handed to the completion provider."""

from __future__ import annotations

import builtins
from typing import TYPE_CHECKING

from parse.patterns import language_keywords

if TYPE_CHECKING:
    from pathlib import Path


def python_builtin_symbols() -> list[str]:
    """Keywords plus public builtin names of the running interpreter."""
    names = [name for name in dir(builtins) if not name.startswith("_")]
    return sorted(set(language_keywords()) | set(names), key=str.casefold)


def load_symbol_table(path: Path) -> list[str]:
    """Read a symbol table with one name per line.

    Blank lines and lines starting with ``#`` are skipped; order is kept and
    repeated names are dropped.
    """
    symbols: list[str] = []
    seen: set[str] = set()
    with path.open(encoding="utf-8") as handle:
        for raw_line in handle:
            line = raw_line.strip()
            if not line or line.startswith("#") or line in seen:
                continue
            seen.add(line)
            symbols.append(line)
    return symbols


__all__ = ["load_symbol_table", "python_builtin_symbols"]
