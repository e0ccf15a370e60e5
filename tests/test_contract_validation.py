from __future__ import annotations

import json
from pathlib import Path

from contract.artifacts import (
    INDEX_ARTIFACT_SPECS,
    SCHEMA_VERSION,
    SNAPSHOTS_JSONL,
    SYMBOLS_JSONL,
)
from contract.validation import (
    ValidationMessage,
    ValidationResult,
    validate_artifacts,
)


def _symbol_record(**overrides: object) -> dict[str, object]:
    record: dict[str, object] = {
        "schema_version": SCHEMA_VERSION,
        "path": "pkg/mod.py",
        "name": "f",
        "kind": "function",
        "line": 1,
        "column": 5,
        "length": 1,
        "scope": "",
        "parameters": "x",
    }
    record.update(overrides)
    return record


def _write_valid_artifacts(d: Path) -> None:
    """Write a minimal valid index to directory d."""
    d.mkdir(parents=True, exist_ok=True)

    (d / SYMBOLS_JSONL).write_text(
        json.dumps(_symbol_record()) + "\n", encoding="utf-8"
    )

    snapshot_record = {
        "schema_version": SCHEMA_VERSION,
        "path": "pkg/mod.py",
        "language": "python",
        "symbols": ["f"],
        "object_types": {},
        "class_members": {},
        "function_parameters": {"f": "x"},
    }
    (d / SNAPSHOTS_JSONL).write_text(
        json.dumps(snapshot_record) + "\n", encoding="utf-8"
    )


def _messages_contain(messages: list[ValidationMessage], needle: str) -> bool:
    """Return True when any validation message contains the given substring."""
    return any(needle in message.message for message in messages)


# Group 1: Data class tests


def test_validation_message_location_with_line() -> None:
    """ValidationMessage.location returns path:line when line is present."""
    msg = ValidationMessage("symbols", Path("x.jsonl"), "bad", line=7)
    assert msg.location() == "x.jsonl:7"


def test_validation_message_location_without_line() -> None:
    """ValidationMessage.location returns only path when line is missing."""
    msg = ValidationMessage("symbols", Path("x.jsonl"), "bad")
    assert msg.location() == "x.jsonl"


def test_validation_message_to_dict() -> None:
    msg = ValidationMessage("symbols", Path("x.jsonl"), "bad", line=3)
    assert msg.to_dict() == {
        "artifact": "symbols",
        "path": "x.jsonl",
        "line": 3,
        "message": "bad",
    }


def test_validation_result_ok_tracks_errors() -> None:
    assert ValidationResult().ok is True
    result = ValidationResult(errors=[ValidationMessage("x", Path("a"), "boom")])
    assert result.ok is False


# Group 2: Directory handling


def test_missing_directory() -> None:
    """validate_artifacts reports a missing artifacts directory."""
    result = validate_artifacts(Path("/nonexistent"))
    assert result.ok is False
    assert _messages_contain(result.errors, "Artifacts directory does not exist")


def test_not_a_directory(tmp_path: Path) -> None:
    file_path = tmp_path / "not-a-dir"
    file_path.write_text("x", encoding="utf-8")

    result = validate_artifacts(file_path)

    assert result.ok is False
    assert _messages_contain(result.errors, "Artifacts path is not a directory")


def test_missing_artifact_files(tmp_path: Path) -> None:
    """validate_artifacts reports each required artifact when directory is empty."""
    artifacts_dir = tmp_path / "artifacts"
    artifacts_dir.mkdir()

    result = validate_artifacts(artifacts_dir)

    assert result.ok is False
    assert len(result.errors) == len(INDEX_ARTIFACT_SPECS)
    assert all("Required artifact file is missing" in m.message for m in result.errors)


# Group 3: Happy path


def test_valid_artifacts_pass(tmp_path: Path) -> None:
    """A complete valid index produces no errors or warnings."""
    artifacts_dir = tmp_path / "artifacts"
    _write_valid_artifacts(artifacts_dir)

    result = validate_artifacts(artifacts_dir)

    assert result.ok is True
    assert result.errors == []
    assert result.warnings == []
    assert result.record_counts == {SYMBOLS_JSONL: 1, SNAPSHOTS_JSONL: 1}


def test_blank_lines_are_ignored(tmp_path: Path) -> None:
    artifacts_dir = tmp_path / "artifacts"
    _write_valid_artifacts(artifacts_dir)
    with (artifacts_dir / SYMBOLS_JSONL).open("a", encoding="utf-8") as handle:
        handle.write("\n\n" + json.dumps(_symbol_record(name="g")) + "\n")

    result = validate_artifacts(artifacts_dir)

    assert result.ok is True
    assert result.record_counts[SYMBOLS_JSONL] == 2


# Group 4: JSONL validation


def test_jsonl_invalid_json(tmp_path: Path) -> None:
    """Invalid JSON in JSONL produces a line-level JSON error."""
    artifacts_dir = tmp_path / "artifacts"
    _write_valid_artifacts(artifacts_dir)
    (artifacts_dir / SYMBOLS_JSONL).write_text("{not-json}\n", encoding="utf-8")

    result = validate_artifacts(artifacts_dir)

    assert result.ok is False
    assert _messages_contain(result.errors, "Invalid JSON")
    assert result.errors[0].line == 1


def test_jsonl_pydantic_failure(tmp_path: Path) -> None:
    """Schema-invalid JSONL records produce schema validation errors."""
    artifacts_dir = tmp_path / "artifacts"
    _write_valid_artifacts(artifacts_dir)
    (artifacts_dir / SYMBOLS_JSONL).write_text(
        json.dumps(_symbol_record(kind="macro")) + "\n",
        encoding="utf-8",
    )

    result = validate_artifacts(artifacts_dir)

    assert result.ok is False
    assert _messages_contain(result.errors, "Schema validation failed")


def test_jsonl_negative_position_rejected(tmp_path: Path) -> None:
    artifacts_dir = tmp_path / "artifacts"
    _write_valid_artifacts(artifacts_dir)
    (artifacts_dir / SYMBOLS_JSONL).write_text(
        json.dumps(_symbol_record(line=-1)) + "\n",
        encoding="utf-8",
    )

    result = validate_artifacts(artifacts_dir)

    assert _messages_contain(result.errors, "Schema validation failed")


def test_snapshot_missing_field_rejected(tmp_path: Path) -> None:
    artifacts_dir = tmp_path / "artifacts"
    _write_valid_artifacts(artifacts_dir)
    (artifacts_dir / SNAPSHOTS_JSONL).write_text(
        json.dumps({"path": "pkg/mod.py", "language": "python"}) + "\n",
        encoding="utf-8",
    )

    result = validate_artifacts(artifacts_dir)

    assert result.ok is False
    assert all(m.artifact == SNAPSHOTS_JSONL for m in result.errors)


def test_jsonl_wrong_schema_version_reported_once(tmp_path: Path) -> None:
    """Wrong schema_version produces a single mismatch error per file."""
    artifacts_dir = tmp_path / "artifacts"
    _write_valid_artifacts(artifacts_dir)
    wrong = json.dumps(_symbol_record(schema_version=SCHEMA_VERSION + 1))
    (artifacts_dir / SYMBOLS_JSONL).write_text(
        wrong + "\n" + wrong + "\n", encoding="utf-8"
    )

    result = validate_artifacts(artifacts_dir)

    assert result.ok is False
    mismatches = [m for m in result.errors if "Schema version mismatch" in m.message]
    assert len(mismatches) == 1
    assert mismatches[0].line == 1


def test_each_artifact_is_checked_against_its_own_model(tmp_path: Path) -> None:
    """A symbol line in the snapshots file fails the snapshot model."""
    artifacts_dir = tmp_path / "artifacts"
    _write_valid_artifacts(artifacts_dir)
    (artifacts_dir / SNAPSHOTS_JSONL).write_text(
        json.dumps(_symbol_record()) + "\n", encoding="utf-8"
    )

    result = validate_artifacts(artifacts_dir)

    assert [spec.filename for spec in INDEX_ARTIFACT_SPECS] == [
        SYMBOLS_JSONL,
        SNAPSHOTS_JSONL,
    ]
    assert [m.artifact for m in result.errors] == [SNAPSHOTS_JSONL]
    assert _messages_contain(result.errors, "Schema validation failed")
