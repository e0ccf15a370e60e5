"""Index artifact contract definitions.

Filenames and record models of the files written by ``symlex index``.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel

from artifacts.models.snapshot import FileSnapshotRecord, FileSymbolRecord
from artifacts.models.symbols import SCHEMA_VERSION

SYMBOLS_JSONL = "symbols.jsonl"
SNAPSHOTS_JSONL = "snapshots.jsonl"


@dataclass(frozen=True)
class IndexArtifactSpec:
    """A JSONL index file and the model each of its lines must satisfy."""

    filename: str
    model: type[BaseModel]


INDEX_ARTIFACT_SPECS: tuple[IndexArtifactSpec, ...] = (
    IndexArtifactSpec(filename=SYMBOLS_JSONL, model=FileSymbolRecord),
    IndexArtifactSpec(filename=SNAPSHOTS_JSONL, model=FileSnapshotRecord),
)


__all__ = [
    "INDEX_ARTIFACT_SPECS",
    "SCHEMA_VERSION",
    "SNAPSHOTS_JSONL",
    "SYMBOLS_JSONL",
    "IndexArtifactSpec",
]
