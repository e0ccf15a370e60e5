"""Textual patterns for the indentation-scoped scripting language.

Every recognizer here is a plain regular expression applied to the whole
document. None of them understands strings, comments or line continuations;
they trade precision for speed and for tolerance of half-typed code.
"""

from __future__ import annotations

import keyword
import re

IDENTIFIER = r"[A-Za-z_][A-Za-z0-9_]*"

CONSTRUCTOR_NAME = "__init__"

# `class Name:` or `class Name(Base, ...):`
CLASS_HEADER = re.compile(rf"\bclass\s+({IDENTIFIER})\s*(?:\(.*\))?:")

# `def name(raw params)`; the parameter text stops at the first `)`.
FUNCTION_HEADER = re.compile(rf"\bdef\s+({IDENTIFIER})\s*\(([^)]*)\)")

# `self.name = ...` (but not `self.name == ...`)
ATTRIBUTE_ASSIGNMENT = re.compile(rf"\bself\.({IDENTIFIER})\s*=(?!=)")

# `name = ...` at the start of a (possibly indented) line.
VARIABLE_ASSIGNMENT = re.compile(rf"^(?:\s*)({IDENTIFIER})\s*=(?!=)", re.MULTILINE)

# `import name`; also fires on the `import` inside `from x import y`.
IMPORT = re.compile(rf"\bimport\s+({IDENTIFIER})")

# `from module import name [as alias]`
FROM_IMPORT = re.compile(
    rf"\bfrom\s+[A-Za-z0-9_.]+\s+import\s+({IDENTIFIER})(?:\s+as\s+({IDENTIFIER}))?"
)

# `name = ClassLike(`; treated as a constructor call.
CONSTRUCTOR_CALL = re.compile(rf"({IDENTIFIER})\s*=\s*({IDENTIFIER})\s*\(")

KEYWORDS: tuple[str, ...] = (
    "and",
    "as",
    "assert",
    "async",
    "await",
    "break",
    "class",
    "continue",
    "def",
    "del",
    "elif",
    "else",
    "except",
    "False",
    "finally",
    "for",
    "from",
    "global",
    "if",
    "import",
    "in",
    "is",
    "lambda",
    "None",
    "nonlocal",
    "not",
    "or",
    "pass",
    "raise",
    "return",
    "True",
    "try",
    "while",
    "with",
    "yield",
)

KEYWORD_SET = frozenset(KEYWORDS)

_KEYWORD_PATTERNS: dict[str, re.Pattern[str]] = {
    word: re.compile(rf"\b{re.escape(word)}\b") for word in KEYWORDS
}

# Members offered for the three literal container shapes and their type names.
STRING_MEMBERS: tuple[str, ...] = (
    "upper",
    "lower",
    "strip",
    "split",
    "join",
    "replace",
    "find",
)
LIST_MEMBERS: tuple[str, ...] = (
    "append",
    "extend",
    "insert",
    "remove",
    "pop",
    "clear",
    "sort",
    "count",
)
DICT_MEMBERS: tuple[str, ...] = (
    "keys",
    "values",
    "items",
    "get",
    "update",
    "pop",
    "clear",
)


def keyword_pattern(word: str) -> re.Pattern[str]:
    """Whole-word pattern for a keyword of the vocabulary."""
    pattern = _KEYWORD_PATTERNS.get(word)
    if pattern is None:
        pattern = re.compile(rf"\b{re.escape(word)}\b")
    return pattern


def is_private(name: str) -> bool:
    return name.startswith("_")


def is_public_or_constructor(name: str) -> bool:
    return not is_private(name) or name == CONSTRUCTOR_NAME


def builtin_shape_members(expression: str) -> tuple[str, ...]:
    """Default members for literal-shaped or builtin-typed expressions.

    Examples:
        >>> builtin_shape_members("'abc'")[:2]
        ('upper', 'lower')
        >>> builtin_shape_members("[1, 2]")[0]
        'append'
        >>> builtin_shape_members("value")
        ()
    """
    if expression == "str" or expression.startswith(("'", '"')):
        return STRING_MEMBERS
    if expression == "list" or expression.endswith("]"):
        return LIST_MEMBERS
    if expression == "dict" or expression.endswith("}"):
        return DICT_MEMBERS
    return ()


def language_keywords() -> list[str]:
    """Keywords of the running interpreter, including soft keywords."""
    return [*keyword.kwlist, *getattr(keyword, "softkwlist", [])]


__all__ = [
    "ATTRIBUTE_ASSIGNMENT",
    "CLASS_HEADER",
    "CONSTRUCTOR_CALL",
    "CONSTRUCTOR_NAME",
    "DICT_MEMBERS",
    "FROM_IMPORT",
    "FUNCTION_HEADER",
    "IDENTIFIER",
    "IMPORT",
    "KEYWORDS",
    "KEYWORD_SET",
    "LIST_MEMBERS",
    "STRING_MEMBERS",
    "VARIABLE_ASSIGNMENT",
    "builtin_shape_members",
    "is_private",
    "is_public_or_constructor",
    "keyword_pattern",
    "language_keywords",
]
