from __future__ import annotations

import pytest

from parse.extractor import SymbolExtractor
from parse.python_extractor import PythonExtractor
from parse.registry import (
    LanguageAlreadyRegisteredError,
    LanguageNotFoundError,
    LanguageRegistry,
    create_extractor,
    default_registry,
)


def test_default_registry_knows_python() -> None:
    registry = default_registry()

    assert registry.list_languages() == ["python"]
    assert registry.is_registered("python")
    assert registry.extensions_for("python") == [".py", ".pyi", ".pyw"]


@pytest.mark.parametrize("extension", [".py", ".PY", ".pyi"])
def test_language_for_extension_ignores_case(extension: str) -> None:
    assert default_registry().language_for_extension(extension) == "python"


def test_unknown_extension_raises() -> None:
    with pytest.raises(LanguageNotFoundError, match=".txt"):
        default_registry().language_for_extension(".txt")


def test_create_returns_fresh_instances() -> None:
    registry = default_registry()

    first = registry.create("python")
    second = registry.create("python")

    assert isinstance(first, PythonExtractor)
    assert first is not second


def test_created_extractor_satisfies_protocol() -> None:
    assert isinstance(create_extractor(), SymbolExtractor)


def test_unknown_language_raises() -> None:
    with pytest.raises(LanguageNotFoundError, match="cobol"):
        create_extractor("cobol")


def test_duplicate_registration_rejected() -> None:
    registry = LanguageRegistry()
    registry.register("python", PythonExtractor, [".py"])

    with pytest.raises(LanguageAlreadyRegisteredError):
        registry.register("python", PythonExtractor, [".py"])


def test_custom_language_variant() -> None:
    class ScriptExtractor(PythonExtractor):
        language = "script"
        file_extensions = [".script"]

    registry = default_registry()
    registry.register("script", ScriptExtractor, ScriptExtractor.file_extensions)

    assert registry.language_for_extension(".script") == "script"
    extractor = registry.create("script")
    assert extractor.language == "script"
    assert "Job" in extractor.extract("class Job:\n    pass\n")
