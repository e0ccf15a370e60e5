"""Index generation entry points."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from settings.config import SymlexConfig


def generate_index(
    *,
    root: Path,
    out_dir: Path | None = None,
    config: SymlexConfig | None = None,
) -> dict[str, object]:
    """Generate the index via lazy import to avoid package import cycles."""
    from artifacts.write import generate_index as _generate_index

    return _generate_index(root=root, out_dir=out_dir, config=config)


__all__ = ["generate_index"]
