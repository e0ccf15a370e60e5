"""Language registry mapping language names and extensions to extractors.

The host picks a language (by name or by file extension) and gets a fresh
extractor instance; nothing about the target language is baked into the
completion or navigation layers.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from parse.python_extractor import PythonExtractor

if TYPE_CHECKING:
    from collections.abc import Callable

    from parse.extractor import SymbolExtractor

logger = logging.getLogger(__name__)


class LanguageNotFoundError(Exception):
    """Raised when a requested language is not registered."""


class LanguageAlreadyRegisteredError(Exception):
    """Raised when attempting to register a language that already exists."""


class LanguageRegistry:
    """Lookup of extractor factories by language name or file extension."""

    def __init__(self) -> None:
        self._factories: dict[str, Callable[[], SymbolExtractor]] = {}
        self._extension_map: dict[str, str] = {}

    def register(
        self,
        name: str,
        factory: Callable[[], SymbolExtractor],
        extensions: list[str],
    ) -> None:
        """Register an extractor factory.

        Raises:
            LanguageAlreadyRegisteredError: If ``name`` is already registered
        """
        if name in self._factories:
            msg = f"Language '{name}' is already registered"
            raise LanguageAlreadyRegisteredError(msg)

        self._factories[name] = factory
        for ext in extensions:
            self._extension_map[ext.lower()] = name
        logger.debug("Registered language %s for %s", name, ", ".join(extensions))

    def create(self, name: str) -> SymbolExtractor:
        """Build a new extractor for ``name``.

        Raises:
            LanguageNotFoundError: If ``name`` is not registered
        """
        factory = self._factories.get(name)
        if factory is None:
            msg = f"Language '{name}' not registered"
            raise LanguageNotFoundError(msg)
        return factory()

    def language_for_extension(self, extension: str) -> str:
        """Language name for a file extension including the dot.

        Raises:
            LanguageNotFoundError: If no language handles ``extension``
        """
        name = self._extension_map.get(extension.lower())
        if name is None:
            msg = f"No language registered for extension '{extension}'"
            raise LanguageNotFoundError(msg)
        return name

    def extensions_for(self, name: str) -> list[str]:
        return sorted(ext for ext, lang in self._extension_map.items() if lang == name)

    def is_registered(self, name: str) -> bool:
        return name in self._factories

    def list_languages(self) -> list[str]:
        return sorted(self._factories)


def default_registry() -> LanguageRegistry:
    """A registry carrying every built-in language variant."""
    registry = LanguageRegistry()
    registry.register(
        PythonExtractor.language, PythonExtractor, PythonExtractor.file_extensions
    )
    return registry


def create_extractor(language: str = "python") -> SymbolExtractor:
    return default_registry().create(language)


__all__ = [
    "LanguageAlreadyRegisteredError",
    "LanguageNotFoundError",
    "LanguageRegistry",
    "create_extractor",
    "default_registry",
]
