"""Ranked completion candidates for bare and dotted tokens."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from completion.config import CompletionConfig
from utils import case_insensitive_sorted, unique

if TYPE_CHECKING:
    from parse.extractor import SymbolExtractor

logger = logging.getLogger(__name__)

MEMBER_SEPARATOR = "."


@dataclass(frozen=True)
class CompletionResult:
    """Outcome of one completion request.

    ``prefix`` is the text the host should treat as typed so far: the whole
    token for bare completion, the part after the last separator for dotted
    completion. ``force_popup`` asks the host to show the popup even for
    zero or one candidate.
    """

    candidates: tuple[str, ...]
    prefix: str
    force_popup: bool = False
    object_expression: str = ""

    @property
    def is_member_access(self) -> bool:
        return bool(self.object_expression)


def rank_members(members: list[str], prefix: str) -> list[str]:
    """Order members by how well they match ``prefix``.

    Starts-with matches come first, then members containing the prefix
    elsewhere, then the rest. Matching ignores case; each group is sorted
    case-insensitively.

    Examples:
        >>> rank_members(["glower", "flow", "lower"], "low")
        ['lower', 'flow', 'glower']
    """
    if not prefix:
        return case_insensitive_sorted(members)

    needle = prefix.casefold()
    starts: list[str] = []
    contains: list[str] = []
    others: list[str] = []
    for member in members:
        folded = member.casefold()
        if folded.startswith(needle):
            starts.append(member)
        elif needle in folded:
            contains.append(member)
        else:
            others.append(member)

    return (
        case_insensitive_sorted(starts)
        + case_insensitive_sorted(contains)
        + case_insensitive_sorted(others)
    )


def split_member_access(token: str) -> tuple[str, str] | None:
    """Split ``obj.attr.pre`` into ``("obj.attr", "pre")``.

    Returns None when the token has no separator after its first character.
    """
    last_sep = token.rfind(MEMBER_SEPARATOR)
    if last_sep <= 0:
        return None
    return token[:last_sep], token[last_sep + 1 :]


class CompletionProvider:
    """Maintains the active candidate model for an editor.

    The base model is the union of the configured builtin symbols, the
    extractor's latest symbol set and every template keyword. It is rebuilt
    on construction, whenever the attached extractor publishes symbols and
    whenever a template is registered.
    """

    def __init__(
        self,
        config: CompletionConfig | None = None,
        extractor: SymbolExtractor | None = None,
    ) -> None:
        config = config or CompletionConfig()
        self._builtin_symbols: list[str] = list(config.builtin_symbols)
        self._templates: dict[str, str] = dict(config.templates)
        self._user_symbols: list[str] = []
        self._completion_prefix = ""
        self._model: tuple[str, ...] = ()
        self._extractor: SymbolExtractor | None = None

        self._rebuild_model()
        if extractor is not None:
            self.set_extractor(extractor)

    @property
    def model(self) -> tuple[str, ...]:
        """The active candidate list, in display order."""
        return self._model

    @property
    def completion_prefix(self) -> str:
        return self._completion_prefix

    @property
    def extractor(self) -> SymbolExtractor | None:
        return self._extractor

    def set_extractor(self, extractor: SymbolExtractor | None) -> None:
        """Follow ``extractor``'s symbol updates instead of the current one."""
        if self._extractor is extractor:
            return

        if self._extractor is not None:
            self._extractor.symbols_changed.unsubscribe(self._on_symbols_changed)
            logger.debug("Detached from %s extractor", self._extractor.language)

        self._extractor = extractor

        if extractor is not None:
            extractor.symbols_changed.subscribe(self._on_symbols_changed)
            logger.debug("Attached to %s extractor", extractor.language)
            self._on_symbols_changed(tuple(extractor.symbols()))

    def update_user_symbols(self, symbols: list[str] | tuple[str, ...]) -> None:
        self._user_symbols = list(symbols)
        self._rebuild_model()

    def _on_symbols_changed(self, symbols: tuple[str, ...]) -> None:
        self.update_user_symbols(symbols)

    def add_template(self, keyword: str, expansion: str) -> None:
        """Register (or replace) a template completion."""
        self._templates[keyword] = expansion
        logger.debug("Registered template %r", keyword)
        self._rebuild_model()

    def template_for(self, keyword: str) -> str:
        """Expansion text for ``keyword``, or an empty string."""
        return self._templates.get(keyword, "")

    def is_template(self, text: str) -> bool:
        return text in self._templates

    def templates(self) -> dict[str, str]:
        return dict(self._templates)

    def candidate_at(self, index: int) -> str:
        if 0 <= index < len(self._model):
            return self._model[index]
        return ""

    def _base_candidates(self) -> list[str]:
        candidates = unique(
            [*self._builtin_symbols, *self._user_symbols, *self._templates]
        )
        candidates = case_insensitive_sorted(candidates)
        if self._completion_prefix:
            candidates = [c for c in candidates if c != self._completion_prefix]
        return candidates

    def _rebuild_model(self) -> None:
        self._model = tuple(self._base_candidates())

    def _members_for(self, object_expression: str) -> list[str]:
        if self._extractor is None:
            return []
        members = self._extractor.get_object_members(object_expression)
        if not members:
            object_type = self._extractor.get_object_type(object_expression)
            if object_type:
                members = self._extractor.get_object_members(object_type)
        return members

    def complete(self, token: str) -> CompletionResult:
        """Make ``token`` the current input and return the ranked candidates."""
        access = split_member_access(token)
        if access is None:
            self._completion_prefix = token.strip()
            self._rebuild_model()
            return CompletionResult(candidates=self._model, prefix=token)

        object_expression, member_prefix = access
        members = self._members_for(object_expression)
        if member_prefix:
            members = [m for m in members if m != member_prefix]

        self._model = tuple(rank_members(members, member_prefix))
        return CompletionResult(
            candidates=self._model,
            prefix=member_prefix,
            force_popup=True,
            object_expression=object_expression,
        )


__all__ = [
    "MEMBER_SEPARATOR",
    "CompletionProvider",
    "CompletionResult",
    "rank_members",
    "split_member_access",
]
