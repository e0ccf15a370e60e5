"""Configuration consumed by the completion provider."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from completion.templates import default_templates


class CompletionConfig(BaseModel):
    """Static inputs of a completion provider, loaded once by the host."""

    model_config = ConfigDict(frozen=True)

    builtin_symbols: tuple[str, ...] = Field(
        default=(),
        description="Language keywords and library names offered everywhere",
    )
    templates: dict[str, str] = Field(
        default_factory=default_templates,
        description="Template keyword -> expansion text",
    )


__all__ = ["CompletionConfig"]
