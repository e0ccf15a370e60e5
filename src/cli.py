"""Command-line interface for symlex."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from artifacts import generate_index
from artifacts.utils import _dumps
from completion.provider import CompletionProvider
from contract.validation import validate_artifacts
from locate.locator import PositionLocator
from parse.registry import LanguageNotFoundError, default_registry
from settings.config import (
    ConfigError,
    build_completion_config,
    load_config,
    resolve_output_dir,
)
from verify.verify import verify_determinism

if TYPE_CHECKING:
    from parse.extractor import SymbolExtractor

logger = logging.getLogger(__name__)


def _add_common_paths(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Project root (default: .)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="symlex")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    symbols_parser = subparsers.add_parser(
        "symbols", help="Print the symbol snapshot of a file"
    )
    symbols_parser.add_argument("file", help="Source file to extract")

    complete_parser = subparsers.add_parser(
        "complete", help="Rank completion candidates for a token"
    )
    complete_parser.add_argument("file", help="Source file providing the context")
    complete_parser.add_argument("token", help="Token being typed (e.g. 'obj.pre')")

    locate_parser = subparsers.add_parser(
        "locate", help="Show the symbol at a position and its definition"
    )
    locate_parser.add_argument("file", help="Source file to extract")
    locate_parser.add_argument("line", type=int, help="1-based line")
    locate_parser.add_argument("column", type=int, help="1-based column")

    index_parser = subparsers.add_parser("index", help="Write the symbol index")
    _add_common_paths(index_parser)
    index_parser.add_argument(
        "--out-dir",
        default=None,
        help="Output directory for index files (default: config output dir)",
    )

    validate_parser = subparsers.add_parser("validate", help="Validate index files")
    _add_common_paths(validate_parser)
    validate_parser.add_argument(
        "--artifacts-dir",
        default=None,
        help="Index directory (default: config output dir)",
    )

    verify_parser = subparsers.add_parser(
        "verify", help="Verify the index is reproducible"
    )
    _add_common_paths(verify_parser)
    verify_parser.add_argument(
        "--artifacts-dir",
        default=None,
        help="Index directory (default: config output dir)",
    )

    return parser


def _write_json(payload: object) -> None:
    sys.stdout.write(_dumps(payload, indent=True).decode("utf-8"))
    sys.stdout.write("\n")


def _resolve_artifacts_dir(root: Path, artifacts_dir: str | None) -> Path:
    if artifacts_dir is None:
        config = load_config(root)
        return resolve_output_dir(root, config.index.output_dir)
    return Path(artifacts_dir).expanduser().resolve()


def _extract_file(file: str) -> tuple[SymbolExtractor, str, Path]:
    """Extract ``file`` with the extractor its project configures."""
    path = Path(file).expanduser().resolve()
    text = path.read_text(encoding="utf-8")
    config = load_config(path.parent)
    registry = default_registry()
    language = config.language
    if path.suffix:
        try:
            language = registry.language_for_extension(path.suffix)
        except LanguageNotFoundError:
            logger.debug("No language for %s; using %s", path.suffix, language)
    extractor = registry.create(language)
    extractor.extract(text)
    return extractor, text, path


def _handle_symbols(file: str) -> int:
    extractor, _, _ = _extract_file(file)
    _write_json(extractor.snapshot())
    return 0


def _handle_complete(file: str, token: str) -> int:
    extractor, _, path = _extract_file(file)
    config = load_config(path.parent)
    provider = CompletionProvider(
        build_completion_config(path.parent, config), extractor=extractor
    )
    _write_json(provider.complete(token))
    return 0


def _handle_locate(file: str, line: int, column: int) -> int:
    extractor, text, _ = _extract_file(file)
    locator = PositionLocator(extractor)
    _write_json(
        {
            "symbol": locator.symbol_at(line, column).model_dump(mode="json"),
            "definition": locator.definition_at(text, line, column).model_dump(
                mode="json"
            ),
        }
    )
    return 0


def _handle_index(root: Path, out_dir: str | None) -> int:
    resolved_out_dir = (
        Path(out_dir).expanduser().resolve() if out_dir is not None else None
    )
    summary = generate_index(root=root, out_dir=resolved_out_dir)
    _write_json(summary)
    return 0


def _handle_validate(root: Path, artifacts_dir: str | None) -> int:
    resolved_artifacts_dir = _resolve_artifacts_dir(root, artifacts_dir)
    result = validate_artifacts(resolved_artifacts_dir)
    if result.errors:
        for error in result.errors:
            sys.stderr.write(f"{error.location()}: {error.message}\n")
        return 1
    return 0


def _handle_verify(root: Path, artifacts_dir: str | None) -> int:
    resolved_artifacts_dir = _resolve_artifacts_dir(root, artifacts_dir)
    try:
        result = verify_determinism(root=root, artifacts_dir=resolved_artifacts_dir)
    except (FileNotFoundError, NotADirectoryError) as exc:
        sys.stderr.write(f"artifacts-dir: {resolved_artifacts_dir}\n")
        sys.stderr.write(f"error: {exc}\n")
        return 2
    if not result.ok:
        for label, paths in (
            ("missing", result.missing),
            ("extra", result.extra),
            ("mismatches", result.mismatches),
        ):
            for path in paths:
                sys.stderr.write(f"{label}: {path}\n")
        return 1
    return 0


def _dispatch(args: argparse.Namespace) -> int:
    if args.command == "symbols":
        return _handle_symbols(args.file)

    if args.command == "complete":
        return _handle_complete(args.file, args.token)

    if args.command == "locate":
        return _handle_locate(args.file, args.line, args.column)

    root = Path(args.root).expanduser().resolve()

    if args.command == "index":
        return _handle_index(root, args.out_dir)

    if args.command == "validate":
        return _handle_validate(root, args.artifacts_dir)

    if args.command == "verify":
        return _handle_verify(root, args.artifacts_dir)

    raise AssertionError


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return _dispatch(args)
    except (ConfigError, LanguageNotFoundError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2
    except (OSError, UnicodeDecodeError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
