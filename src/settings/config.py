from __future__ import annotations

import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from completion.builtins import load_symbol_table, python_builtin_symbols
from completion.config import CompletionConfig
from completion.templates import default_templates

CONFIG_FILENAME = "symlex.toml"

DEFAULT_OUTPUT_DIR = ".symlex"


class CompletionSettings(BaseModel):
    """Completion provider settings."""

    model_config = ConfigDict(extra="forbid")

    builtins_file: str | None = Field(
        default=None,
        description="Symbol table file (one name per line), relative to the root",
    )
    templates: dict[str, str] = Field(
        default_factory=dict,
        description="Extra template completions: keyword -> expansion",
    )
    replace_default_templates: bool = Field(
        default=False,
        description="Use only the configured templates, dropping the defaults",
    )

    @field_validator("templates", mode="before")
    @classmethod
    def validate_templates(cls, v: object) -> object:
        """Reject empty template keywords.

        Runs in `mode="before"` so the error names the raw TOML key.
        """
        if v is None:
            return {}
        if isinstance(v, dict):
            for keyword in v:
                if not isinstance(keyword, str) or not keyword.strip():
                    msg = f"Invalid template keyword {keyword!r}"
                    raise ValueError(msg)
        return v


class IndexSettings(BaseModel):
    """Settings for the on-disk symbol index."""

    model_config = ConfigDict(extra="forbid")

    output_dir: str = Field(
        default=DEFAULT_OUTPUT_DIR,
        description="Output directory for generated index files",
    )
    include: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to include (empty = all source files)",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to exclude",
    )
    nested_gitignore: bool = Field(
        default=False,
        description="Compose nested .gitignore files (default: root only)",
    )


class SymlexConfig(BaseModel):
    """Configuration for symlex."""

    model_config = ConfigDict(extra="forbid")

    language: str = Field(default="python", description="Target language name")
    completion: CompletionSettings = Field(default_factory=CompletionSettings)
    index: IndexSettings = Field(default_factory=IndexSettings)


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def resolve_output_dir(root: Path, output_dir: str) -> Path:
    """Resolve a config-provided output_dir safely within the project root.

    The output_dir must be a non-empty relative path that remains within
    the root after resolution. Absolute paths and paths that escape the
    root are rejected.
    """
    if not output_dir:
        msg = "output_dir must be a non-empty relative path"
        raise ConfigError(msg)

    output_path = Path(output_dir)
    if output_dir.startswith("~") or output_path.is_absolute():
        msg = "output_dir must be a relative path within the project root"
        raise ConfigError(msg)

    try:
        resolved_root = root.resolve()
        resolved_output = (resolved_root / output_path).resolve()
    except OSError as exc:
        msg = f"Failed to resolve output_dir '{output_dir}': {exc}"
        raise ConfigError(msg) from exc

    try:
        resolved_output.relative_to(resolved_root)
    except ValueError as exc:
        msg = f"output_dir '{output_dir}' escapes the project root"
        raise ConfigError(msg) from exc

    return resolved_output


def load_config(root: Path) -> SymlexConfig:
    """Load configuration from symlex.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return SymlexConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return SymlexConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e


def build_completion_config(root: Path, config: SymlexConfig) -> CompletionConfig:
    """Load the builtin symbol table and merge templates for a provider."""
    settings = config.completion

    if settings.builtins_file:
        table_path = Path(root) / settings.builtins_file
        try:
            builtin_symbols = load_symbol_table(table_path)
        except (OSError, UnicodeDecodeError) as e:
            msg = f"Cannot read builtins_file {table_path}: {e}"
            raise ConfigError(msg) from e
    else:
        builtin_symbols = python_builtin_symbols()

    templates = {} if settings.replace_default_templates else default_templates()
    templates.update(settings.templates)

    return CompletionConfig(builtin_symbols=tuple(builtin_symbols), templates=templates)
