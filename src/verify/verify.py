"""Determinism and idempotency verification for symlex."""

from __future__ import annotations

import filecmp
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from artifacts.write import generate_index
from parse.registry import create_extractor


@dataclass(frozen=True)
class DeterminismResult:
    ok: bool
    mismatches: tuple[str, ...] = field(default_factory=tuple)
    missing: tuple[str, ...] = field(default_factory=tuple)
    extra: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class IdempotencyResult:
    ok: bool
    differing: tuple[str, ...] = field(default_factory=tuple)


def _list_relative_files(root: Path) -> set[Path]:
    return {path.relative_to(root) for path in root.rglob("*") if path.is_file()}


def verify_determinism(*, root: Path, artifacts_dir: Path) -> DeterminismResult:
    """Verify that an existing index matches a fresh regeneration.

    Regenerates the index into a temporary directory and compares it
    byte-for-byte against ``artifacts_dir``. File sets are compared on
    relative paths.

    Raises:
        FileNotFoundError: If artifacts_dir does not exist.
        NotADirectoryError: If artifacts_dir is not a directory.
    """
    if not artifacts_dir.exists():
        msg = f"Artifacts directory does not exist: {artifacts_dir}"
        raise FileNotFoundError(msg)
    if not artifacts_dir.is_dir():
        msg = f"Artifacts path is not a directory: {artifacts_dir}"
        raise NotADirectoryError(msg)
    with tempfile.TemporaryDirectory() as temp_dir:
        temp_path = Path(temp_dir)
        generate_index(root=root, out_dir=temp_path)

        original_files = _list_relative_files(artifacts_dir)
        regenerated_files = _list_relative_files(temp_path)

        missing = sorted(str(path) for path in original_files - regenerated_files)
        extra = sorted(str(path) for path in regenerated_files - original_files)

        mismatches = sorted(
            str(path)
            for path in original_files & regenerated_files
            if not filecmp.cmp(artifacts_dir / path, temp_path / path, shallow=False)
        )

    ok = not missing and not extra and not mismatches
    return DeterminismResult(
        ok=ok,
        mismatches=tuple(mismatches),
        missing=tuple(missing),
        extra=tuple(extra),
    )


def verify_idempotent(text: str, language: str = "python") -> IdempotencyResult:
    """Extract ``text`` twice with one extractor and compare the results."""
    extractor = create_extractor(language)
    extractor.extract(text)
    first = extractor.snapshot()
    extractor.extract(text)
    second = extractor.snapshot()

    differing = tuple(
        name
        for name in type(first).model_fields
        if getattr(first, name) != getattr(second, name)
    )
    return IdempotencyResult(ok=not differing, differing=differing)
