"""Validation helpers for index artifacts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import orjson
from pydantic import BaseModel, ValidationError

from contract.artifacts import INDEX_ARTIFACT_SPECS, SCHEMA_VERSION

if TYPE_CHECKING:
    from pathlib import Path


@dataclass(frozen=True)
class ValidationMessage:
    artifact: str
    path: Path
    message: str
    line: int | None = None

    def location(self) -> str:
        if self.line is None:
            return str(self.path)
        return f"{self.path}:{self.line}"

    def to_dict(self) -> dict[str, object]:
        return {
            "artifact": self.artifact,
            "path": str(self.path),
            "line": self.line,
            "message": self.message,
        }


@dataclass
class ValidationResult:
    errors: list[ValidationMessage] = field(default_factory=list)
    warnings: list[ValidationMessage] = field(default_factory=list)
    record_counts: dict[str, int] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors


def validate_artifacts(artifacts_dir: Path) -> ValidationResult:
    result = ValidationResult()

    if not artifacts_dir.is_dir():
        message = (
            "Artifacts path is not a directory."
            if artifacts_dir.exists()
            else "Artifacts directory does not exist."
        )
        result.errors.append(
            ValidationMessage(
                artifact="artifacts_dir", path=artifacts_dir, message=message
            )
        )
        return result

    for spec in INDEX_ARTIFACT_SPECS:
        path = artifacts_dir / spec.filename
        if not path.exists():
            result.errors.append(
                ValidationMessage(
                    artifact=spec.filename,
                    path=path,
                    message="Required artifact file is missing.",
                )
            )
            continue
        _validate_jsonl(spec.filename, path, spec.model, result)

    return result


def _validate_jsonl(
    artifact_name: str,
    path: Path,
    model: type[BaseModel],
    result: ValidationResult,
) -> None:
    try:
        handle = path.open("rb")
    except OSError as exc:
        result.errors.append(
            ValidationMessage(
                artifact=artifact_name,
                path=path,
                message=f"Failed to read file: {exc}.",
            )
        )
        return

    count = 0
    mismatch_emitted = False
    with handle:
        for line_number, raw_line in enumerate(handle, 1):
            line = raw_line.strip()
            if not line:
                continue
            try:
                data = orjson.loads(line)
            except orjson.JSONDecodeError as exc:
                result.errors.append(
                    ValidationMessage(
                        artifact=artifact_name,
                        path=path,
                        line=line_number,
                        message=f"Invalid JSON: {exc}.",
                    )
                )
                continue

            try:
                record = model.model_validate(data)
            except ValidationError as exc:
                result.errors.append(
                    ValidationMessage(
                        artifact=artifact_name,
                        path=path,
                        line=line_number,
                        message=f"Schema validation failed: {exc}.",
                    )
                )
                continue

            count += 1
            schema_version = getattr(record, "schema_version", SCHEMA_VERSION)
            if schema_version != SCHEMA_VERSION and not mismatch_emitted:
                result.errors.append(
                    ValidationMessage(
                        artifact=artifact_name,
                        path=path,
                        line=line_number,
                        message=(
                            "Schema version mismatch: "
                            f"expected {SCHEMA_VERSION}, got {schema_version}."
                        ),
                    )
                )
                mismatch_emitted = True

    result.record_counts[artifact_name] = count


__all__ = [
    "ValidationMessage",
    "ValidationResult",
    "validate_artifacts",
]
