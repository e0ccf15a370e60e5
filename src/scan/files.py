"""Source file discovery for the symbol index."""

from __future__ import annotations

from fnmatch import fnmatch
from typing import TYPE_CHECKING, cast

from gitignore_parser import parse_gitignore  # type: ignore[import-untyped]

from settings.config import DEFAULT_OUTPUT_DIR

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator
    from pathlib import Path


def _matches_any(rel_path: str, patterns: list[str] | None) -> bool:
    return bool(patterns) and any(fnmatch(rel_path, pat) for pat in patterns or ())


def _should_include_file(
    path: Path,
    directory: Path,
    output_dir: str,
    gitignore_matches: Callable[[str], bool] | None,
    include_patterns: list[str] | None,
    exclude_patterns: list[str] | None,
) -> bool:
    """Check if a file should be included based on all filtering rules."""
    if not path.is_file() or path.is_symlink():
        return False

    if not _is_within_root(path, directory):
        return False

    rel_path = path.relative_to(directory)
    rel_path_str = rel_path.as_posix()

    if output_dir and rel_path.parts and rel_path.parts[0] == output_dir:
        return False

    if gitignore_matches is not None and gitignore_matches(str(path)):
        return False

    if include_patterns and not _matches_any(rel_path_str, include_patterns):
        return False

    return not _matches_any(rel_path_str, exclude_patterns)


def _is_within_root(path: Path, root: Path) -> bool:
    """Return True when the resolved path stays within the resolved root."""
    try:
        path.resolve().relative_to(root.resolve())
    except (OSError, ValueError):
        return False
    return True


def _build_gitignore_matcher(
    root: Path,
    *,
    nested_gitignore: bool,
) -> Callable[[str], bool] | None:
    if not nested_gitignore:
        gitignore_path = root / ".gitignore"
        if gitignore_path.is_file():
            return cast("Callable[[str], bool]", parse_gitignore(gitignore_path))
        return None

    gitignore_paths = sorted(
        {path for path in root.rglob(".gitignore") if path.is_file()},
        key=lambda p: p.relative_to(root).as_posix(),
    )
    if not gitignore_paths:
        return None

    matchers = [parse_gitignore(path) for path in gitignore_paths]

    def matches(path_str: str) -> bool:
        for matcher in matchers:
            try:
                if matcher(path_str):
                    return True
            except ValueError:
                # Path outside this .gitignore's base directory.
                continue
        return False

    return matches


def find_source_files(
    directory: Path,
    *,
    extensions: Iterable[str],
    output_dir: str = DEFAULT_OUTPUT_DIR,
    include_patterns: list[str] | None = None,
    exclude_patterns: list[str] | None = None,
    nested_gitignore: bool = False,
) -> Iterator[Path]:
    """Find source files with the given extensions, respecting .gitignore.

    Args:
        directory: Directory to search
        extensions: File extensions including the dot (e.g. [".py"])
        output_dir: Top-level directory name to skip
        include_patterns: Optional fnmatch patterns; if provided, files must
            match at least one
        exclude_patterns: Optional fnmatch patterns; matching files are skipped

    Yields:
        Paths sorted lexicographically by relative path.
    """
    wanted = {ext.lower() for ext in extensions}
    gitignore_matches = _build_gitignore_matcher(
        directory,
        nested_gitignore=nested_gitignore,
    )

    matched_files = [
        path
        for path in directory.rglob("*")
        if path.suffix.lower() in wanted
        and _should_include_file(
            path,
            directory,
            output_dir,
            gitignore_matches,
            include_patterns,
            exclude_patterns,
        )
    ]

    matched_files.sort(key=lambda p: p.relative_to(directory).as_posix())

    yield from matched_files


__all__ = ["find_source_files"]
