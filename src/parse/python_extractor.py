"""Pattern-based symbol extraction for Python source."""

from __future__ import annotations

from typing import TYPE_CHECKING

from artifacts.models.snapshot import ExtractionSnapshot
from artifacts.models.symbols import SymbolKind, SymbolRecord
from parse.extractor import BaseExtractor
from parse.patterns import (
    ATTRIBUTE_ASSIGNMENT,
    CLASS_HEADER,
    CONSTRUCTOR_CALL,
    CONSTRUCTOR_NAME,
    FROM_IMPORT,
    FUNCTION_HEADER,
    IMPORT,
    KEYWORD_SET,
    KEYWORDS,
    VARIABLE_ASSIGNMENT,
    builtin_shape_members,
    is_private,
    is_public_or_constructor,
    keyword_pattern,
)
from parse.scope import ScopeResolver
from utils import LineIndex, case_insensitive_sorted, unique

if TYPE_CHECKING:
    import re
    from collections.abc import Sequence


def _from_import_binding(match: re.Match[str]) -> tuple[str, int, int]:
    """(name, start, end) of the name a from-import binds, alias first."""
    group = 2 if match.group(2) else 1
    return match.group(group), match.start(group), match.end(group)


class _Scan:
    """One full-text pass. Builds structures locally, never shared."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.lines = LineIndex(text)
        self.scopes = ScopeResolver(text)
        self.names: list[str] = list(KEYWORDS)
        self.class_members: dict[str, list[str]] = {}
        self.object_types: dict[str, str] = {}
        self.parameters: dict[str, str] = {}

    def _add_member(self, class_name: str, member: str) -> None:
        members = self.class_members.setdefault(class_name, [])
        if member not in members:
            members.append(member)

    def classes(self) -> None:
        for class_range in self.scopes.ranges:
            if not is_private(class_range.name):
                self.names.append(class_range.name)
            self.class_members.setdefault(class_range.name, [])

    def class_bodies(self) -> None:
        for class_range in self.scopes.ranges:
            body = self.text[class_range.body_start : class_range.body_end]
            for match in FUNCTION_HEADER.finditer(body):
                method = match.group(1)
                if is_public_or_constructor(method):
                    self._add_member(class_range.name, method)
            for match in ATTRIBUTE_ASSIGNMENT.finditer(body):
                attribute = match.group(1)
                if not is_private(attribute):
                    self._add_member(class_range.name, attribute)
            self._add_member(class_range.name, CONSTRUCTOR_NAME)

    def functions(self) -> None:
        for match in FUNCTION_HEADER.finditer(self.text):
            name = match.group(1)
            if not is_public_or_constructor(name):
                continue
            self.names.append(name)
            scope = self.scopes.class_for(match.start(1))
            key = f"{scope}.{name}" if scope else name
            self.parameters[key] = match.group(2).strip()

    def variables(self) -> None:
        for match in VARIABLE_ASSIGNMENT.finditer(self.text):
            name = match.group(1)
            if name not in KEYWORD_SET and not is_private(name):
                self.names.append(name)
        for match in ATTRIBUTE_ASSIGNMENT.finditer(self.text):
            self.names.append(match.group(1))

    def imports(self) -> None:
        for match in IMPORT.finditer(self.text):
            self.names.append(match.group(1))
        for match in FROM_IMPORT.finditer(self.text):
            self.names.append(_from_import_binding(match)[0])

    def types(self) -> None:
        for match in CONSTRUCTOR_CALL.finditer(self.text):
            self.object_types[match.group(1)] = match.group(2)

    def _record(
        self,
        name: str,
        kind: SymbolKind,
        start: int,
        end: int,
        scope: str = "",
        parameters: str = "",
    ) -> SymbolRecord:
        line, column = self.lines.line_column(start)
        return SymbolRecord(
            name=name,
            kind=kind,
            line=line,
            column=column,
            length=end - start,
            scope=scope,
            parameters=parameters,
        )

    def _variable_record(self, match: re.Match[str], scope: str) -> SymbolRecord:
        return self._record(
            match.group(1), SymbolKind.VARIABLE, match.start(1), match.end(1), scope
        )

    def positions(self) -> list[SymbolRecord]:
        """Position records in fixed order: keywords, classes, functions,
        variables (then attributes), imports (then from-imports).
        """
        records: list[SymbolRecord] = []
        seen: set[str] = set()

        def first_time(key: str) -> bool:
            if key in seen:
                return False
            seen.add(key)
            return True

        for word in KEYWORDS:
            for match in keyword_pattern(word).finditer(self.text):
                records.append(
                    self._record(word, SymbolKind.KEYWORD, match.start(), match.end())
                )

        for class_range in self.scopes.ranges:
            if not first_time(f"c:{class_range.name}"):
                continue
            start = class_range.name_start
            records.append(
                self._record(
                    class_range.name,
                    SymbolKind.CLASS,
                    start,
                    start + len(class_range.name),
                    scope=self.scopes.class_for(start),
                )
            )

        for match in FUNCTION_HEADER.finditer(self.text):
            name = match.group(1)
            scope = self.scopes.class_for(match.start(1))
            if not first_time(f"f:{scope}.{name}"):
                continue
            records.append(
                self._record(
                    name,
                    SymbolKind.FUNCTION,
                    match.start(1),
                    match.end(1),
                    scope=scope,
                    parameters=match.group(2).strip(),
                )
            )

        # Module-level variables key on the bare name; attributes always on
        # "scope.name".
        for match in VARIABLE_ASSIGNMENT.finditer(self.text):
            name = match.group(1)
            if name in KEYWORD_SET:
                continue
            scope = self.scopes.class_for(match.start(1))
            key = f"v:{scope}.{name}" if scope else f"v:{name}"
            if first_time(key):
                records.append(self._variable_record(match, scope))
        for match in ATTRIBUTE_ASSIGNMENT.finditer(self.text):
            scope = self.scopes.class_for(match.start(1))
            if first_time(f"v:{scope}.{match.group(1)}"):
                records.append(self._variable_record(match, scope))

        for match in IMPORT.finditer(self.text):
            name = match.group(1)
            if first_time(f"i:{name}"):
                records.append(
                    self._record(name, SymbolKind.IMPORT, match.start(1), match.end(1))
                )
        for match in FROM_IMPORT.finditer(self.text):
            name, start, end = _from_import_binding(match)
            if first_time(f"i:{name}"):
                records.append(self._record(name, SymbolKind.IMPORT, start, end))

        return records

    def run(self) -> ExtractionSnapshot:
        self.classes()
        self.class_bodies()
        self.functions()
        self.variables()
        self.imports()
        self.types()
        return ExtractionSnapshot(
            symbols=tuple(case_insensitive_sorted(unique(self.names))),
            positions=tuple(self.positions()),
            object_types=self.object_types,
            class_members={
                name: tuple(members) for name, members in self.class_members.items()
            },
            function_parameters=self.parameters,
        )


class PythonExtractor(BaseExtractor):
    """Symbol extractor for Python-like, indentation-scoped source."""

    language = "python"
    file_extensions = [".py", ".pyw", ".pyi"]

    def _scan(self, text: str) -> ExtractionSnapshot:
        return _Scan(text).run()

    def _fallback_members(self, name: str) -> Sequence[str]:
        return builtin_shape_members(name)


__all__ = ["PythonExtractor"]
