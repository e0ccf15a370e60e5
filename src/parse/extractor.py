"""Extractor interface shared by every target-language variant."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from artifacts.models.snapshot import ExtractionSnapshot
from artifacts.models.symbols import EMPTY_SYMBOL, SymbolRecord
from events import EventChannel

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)


@runtime_checkable
class SymbolExtractor(Protocol):
    """Protocol for language-specific symbol extractors.

    Each variant provides:
    - A canonical language name and the file extensions it handles
    - ``extract``, which rescans a whole document and replaces all state
    - Copy-returning getters over the last extraction
    - Two event channels fired together after every extraction
    """

    symbols_changed: EventChannel[tuple[str, ...]]
    positions_changed: EventChannel[tuple[SymbolRecord, ...]]

    @property
    def language(self) -> str:
        """Canonical language name (e.g., 'python')."""
        ...

    @property
    def file_extensions(self) -> list[str]:
        """Supported file extensions including the dot."""
        ...

    def extract(self, text: str) -> list[str]:
        """Rebuild every derived structure from ``text``.

        Returns the sorted, de-duplicated symbol names.
        """
        ...

    def symbols(self) -> list[str]: ...

    def symbols_info(self) -> list[SymbolRecord]: ...

    def symbol_at(self, line: int, column: int) -> SymbolRecord: ...

    def get_object_members(self, name: str) -> list[str]: ...

    def get_object_type(self, name: str) -> str: ...

    def object_types(self) -> dict[str, str]: ...

    def class_members(self) -> dict[str, list[str]]: ...

    def function_parameters(self) -> dict[str, str]: ...

    def snapshot(self) -> ExtractionSnapshot: ...


class BaseExtractor:
    """State and publishing shared by the concrete extractors.

    Subclasses implement :meth:`_scan`, which builds a complete
    :class:`ExtractionSnapshot` without touching ``self``. The base class
    swaps it in as a whole and then publishes, so no reader can observe a
    half-built state.
    """

    language = "generic"
    file_extensions: list[str] = []

    def __init__(self) -> None:
        self._snapshot = ExtractionSnapshot()
        self.symbols_changed: EventChannel[tuple[str, ...]] = EventChannel(
            "symbols_changed"
        )
        self.positions_changed: EventChannel[tuple[SymbolRecord, ...]] = (
            EventChannel("positions_changed")
        )

    def _scan(self, text: str) -> ExtractionSnapshot:
        raise NotImplementedError

    def extract(self, text: str) -> list[str]:
        if not text.strip():
            snapshot = ExtractionSnapshot()
        else:
            snapshot = self._scan(text)

        self._snapshot = snapshot
        logger.debug(
            "%s extraction: %d symbols, %d positions, %d classes",
            self.language,
            len(snapshot.symbols),
            len(snapshot.positions),
            len(snapshot.class_members),
        )

        try:
            self.symbols_changed.publish(snapshot.symbols)
        finally:
            self.positions_changed.publish(snapshot.positions)
        return list(snapshot.symbols)

    def symbols(self) -> list[str]:
        return list(self._snapshot.symbols)

    def symbols_info(self) -> list[SymbolRecord]:
        return list(self._snapshot.positions)

    def symbol_at(self, line: int, column: int) -> SymbolRecord:
        """First record on ``line`` whose name span covers ``column``."""
        return find_symbol_at(self._snapshot.positions, line, column)

    def get_object_type(self, name: str) -> str:
        return self._snapshot.object_types.get(name, "")

    def object_types(self) -> dict[str, str]:
        return dict(self._snapshot.object_types)

    def class_members(self) -> dict[str, list[str]]:
        return {
            name: list(members)
            for name, members in self._snapshot.class_members.items()
        }

    def function_parameters(self) -> dict[str, str]:
        return dict(self._snapshot.function_parameters)

    def snapshot(self) -> ExtractionSnapshot:
        return self._snapshot.model_copy(deep=True)

    def get_object_members(self, name: str) -> list[str]:
        members = self._snapshot.class_members.get(name, ())
        if not members:
            class_name = self._snapshot.object_types.get(name, "")
            if class_name:
                members = self._snapshot.class_members.get(class_name, ())
        if not members:
            members = self._fallback_members(name)
        return list(dict.fromkeys(members))

    def _fallback_members(self, name: str) -> Sequence[str]:
        return ()


def find_symbol_at(
    positions: Sequence[SymbolRecord], line: int, column: int
) -> SymbolRecord:
    for record in positions:
        if record.contains(line, column):
            return record
    return EMPTY_SYMBOL


__all__ = ["BaseExtractor", "SymbolExtractor", "find_symbol_at"]
