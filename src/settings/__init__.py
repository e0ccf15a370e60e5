"""Project configuration for symlex."""

from settings.config import (
    CONFIG_FILENAME,
    CompletionSettings,
    ConfigError,
    IndexSettings,
    SymlexConfig,
    build_completion_config,
    load_config,
    resolve_output_dir,
)

__all__ = [
    "CONFIG_FILENAME",
    "CompletionSettings",
    "ConfigError",
    "IndexSettings",
    "SymlexConfig",
    "build_completion_config",
    "load_config",
    "resolve_output_dir",
]
