"""Index artifact contract for symlex.

Filenames, record models and validation of the files written by the indexer.
"""

from contract.artifacts import (
    INDEX_ARTIFACT_SPECS,
    SCHEMA_VERSION,
    SNAPSHOTS_JSONL,
    SYMBOLS_JSONL,
    IndexArtifactSpec,
)


def __getattr__(name: str) -> object:
    if name in {"ValidationMessage", "ValidationResult", "validate_artifacts"}:
        from contract.validation import (
            ValidationMessage,
            ValidationResult,
            validate_artifacts,
        )

        return {
            "ValidationMessage": ValidationMessage,
            "ValidationResult": ValidationResult,
            "validate_artifacts": validate_artifacts,
        }[name]

    msg = f"module 'contract' has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "INDEX_ARTIFACT_SPECS",
    "SCHEMA_VERSION",
    "SNAPSHOTS_JSONL",
    "SYMBOLS_JSONL",
    "IndexArtifactSpec",
    "ValidationMessage",
    "ValidationResult",
    "validate_artifacts",
]
