"""Snapshot models bundling the derived structures of one extraction."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from artifacts.models.symbols import SCHEMA_VERSION, SymbolRecord


class ExtractionSnapshot(BaseModel):
    """Every structure rebuilt by a single extraction call."""

    model_config = ConfigDict(frozen=True)

    symbols: tuple[str, ...] = ()
    positions: tuple[SymbolRecord, ...] = ()
    object_types: dict[str, str] = Field(default_factory=dict)
    class_members: dict[str, tuple[str, ...]] = Field(default_factory=dict)
    function_parameters: dict[str, str] = Field(default_factory=dict)


class FileSymbolRecord(SymbolRecord):
    """A symbol record written to the on-disk index, tagged with its file."""

    schema_version: int = Field(default=SCHEMA_VERSION)
    path: str


class FileSnapshotRecord(BaseModel):
    """Per-file summary written to the on-disk index."""

    schema_version: int = Field(default=SCHEMA_VERSION)
    path: str
    language: str
    symbols: list[str]
    object_types: dict[str, str]
    class_members: dict[str, list[str]]
    function_parameters: dict[str, str]


__all__ = ["ExtractionSnapshot", "FileSnapshotRecord", "FileSymbolRecord"]
