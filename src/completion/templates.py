"""Template completions: keywords that expand to multi-line skeletons."""

from __future__ import annotations

DEFAULT_TEMPLATES: dict[str, str] = {
    "main": 'if __name__ == "__main__":\n    ',
    "try": "try:\n    \nexcept Exception as e:\n    ",
    "for": "for i in range(10):\n    ",
    "while": "while True:\n    ",
    "if": "if condition:\n    ",
    "elif": "elif condition:\n    ",
    "else": "else:\n    ",
    "class": "class ClassName:\n    def __init__(self):\n        ",
    "def": "def function_name(parameters):\n    ",
    "return": "return ",
    "import": "import ",
    "from": "from module import ",
}


def default_templates() -> dict[str, str]:
    return dict(DEFAULT_TEMPLATES)


__all__ = ["DEFAULT_TEMPLATES", "default_templates"]
