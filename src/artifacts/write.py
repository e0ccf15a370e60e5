from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from artifacts.models.snapshot import FileSnapshotRecord, FileSymbolRecord
from artifacts.utils import _get_output_dir_name, _write_jsonl
from contract.artifacts import SNAPSHOTS_JSONL, SYMBOLS_JSONL
from parse.registry import default_registry
from scan.files import find_source_files
from settings.config import load_config, resolve_output_dir

if TYPE_CHECKING:
    from pathlib import Path

    from settings.config import SymlexConfig

logger = logging.getLogger(__name__)


def _read_source(file_path: Path) -> str | None:
    try:
        return file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Skipping unreadable file %s: %s", file_path, exc)
        return None


def generate_index(
    *,
    root: Path,
    out_dir: Path | None = None,
    config: SymlexConfig | None = None,
) -> dict[str, object]:
    """Extract every source file under ``root`` and write the index files.

    Each file is extracted on its own; names are never resolved across
    files.

    Args:
        root: Root directory of the project to index
        out_dir: Optional output directory for generated artifacts
        config: Optional configuration (loaded from ``root`` when omitted)

    Returns:
        Dictionary with counts and list of generated artifact paths.
    """
    if config is None:
        config = load_config(root)

    if out_dir is None:
        out_dir = resolve_output_dir(root, config.index.output_dir)

    out_dir.mkdir(parents=True, exist_ok=True)

    registry = default_registry()
    extractor = registry.create(config.language)

    symbol_records: list[FileSymbolRecord] = []
    snapshot_records: list[FileSnapshotRecord] = []

    for file_path in find_source_files(
        root,
        extensions=registry.extensions_for(config.language),
        output_dir=_get_output_dir_name(out_dir, root),
        include_patterns=config.index.include,
        exclude_patterns=config.index.exclude,
        nested_gitignore=config.index.nested_gitignore,
    ):
        text = _read_source(file_path)
        if text is None:
            continue

        relative_path = file_path.relative_to(root).as_posix()
        extractor.extract(text)
        snapshot = extractor.snapshot()

        symbol_records.extend(
            FileSymbolRecord(path=relative_path, **record.model_dump())
            for record in snapshot.positions
        )
        snapshot_records.append(
            FileSnapshotRecord(
                path=relative_path,
                language=config.language,
                symbols=list(snapshot.symbols),
                object_types=dict(snapshot.object_types),
                class_members={
                    name: list(members)
                    for name, members in snapshot.class_members.items()
                },
                function_parameters=dict(snapshot.function_parameters),
            )
        )

    _write_jsonl(out_dir / SYMBOLS_JSONL, symbol_records)
    _write_jsonl(out_dir / SNAPSHOTS_JSONL, snapshot_records)

    logger.info(
        "Indexed %d files (%d symbol records) into %s",
        len(snapshot_records),
        len(symbol_records),
        out_dir,
    )

    return {
        "file_count": len(snapshot_records),
        "symbol_count": len(symbol_records),
        "artifacts": [str(out_dir / name) for name in (SYMBOLS_JSONL, SNAPSHOTS_JSONL)],
    }
