"""Parsing utilities for symlex."""

from parse.extractor import BaseExtractor, SymbolExtractor, find_symbol_at
from parse.python_extractor import PythonExtractor
from parse.registry import (
    LanguageAlreadyRegisteredError,
    LanguageNotFoundError,
    LanguageRegistry,
    create_extractor,
    default_registry,
)
from parse.scope import ClassRange, ScopeResolver, find_class_end, find_class_ranges

__all__ = [
    "BaseExtractor",
    "ClassRange",
    "LanguageAlreadyRegisteredError",
    "LanguageNotFoundError",
    "LanguageRegistry",
    "PythonExtractor",
    "ScopeResolver",
    "SymbolExtractor",
    "create_extractor",
    "default_registry",
    "find_class_end",
    "find_class_ranges",
    "find_symbol_at",
]
