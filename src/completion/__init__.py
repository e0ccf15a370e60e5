"""Completion ranking for symlex."""

from completion.builtins import load_symbol_table, python_builtin_symbols
from completion.config import CompletionConfig
from completion.provider import (
    CompletionProvider,
    CompletionResult,
    rank_members,
    split_member_access,
)
from completion.templates import DEFAULT_TEMPLATES, default_templates

__all__ = [
    "DEFAULT_TEMPLATES",
    "CompletionConfig",
    "CompletionProvider",
    "CompletionResult",
    "default_templates",
    "load_symbol_table",
    "python_builtin_symbols",
    "rank_members",
    "split_member_access",
]
