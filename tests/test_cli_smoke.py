from __future__ import annotations

import json
import shutil
from pathlib import Path

import pytest

from cli import main
from settings.config import load_config


def _write_minimal_repo(root: Path) -> None:
    (root / "pkg").mkdir(parents=True, exist_ok=True)
    (root / "pkg" / "__init__.py").write_text("", encoding="utf-8")
    (root / "pkg" / "module.py").write_text(
        '"""Minimal module."""\n',
        encoding="utf-8",
    )


def _copy_mini_repo_fixture(root: Path) -> None:
    fixture_repo = Path(__file__).parent / "fixtures" / "mini_repo"
    shutil.copytree(fixture_repo, root)


def _write_source(tmp_path: Path, text: str, name: str = "sample.py") -> Path:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_cli_symbols_prints_snapshot(
    tmp_path: Path, sample_source: str, capsys: pytest.CaptureFixture[str]
) -> None:
    source = _write_source(tmp_path, sample_source)

    exit_code = main(["symbols", str(source)])

    assert exit_code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["object_types"] == {"pet": "Animal"}
    assert payload["class_members"]["Animal"] == ["__init__", "speak", "name"]
    assert "Animal" in payload["symbols"]


def test_cli_complete_member_access(
    tmp_path: Path, sample_source: str, capsys: pytest.CaptureFixture[str]
) -> None:
    source = _write_source(tmp_path, sample_source)

    exit_code = main(["complete", str(source), "pet.sp"])

    assert exit_code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload == {
        "candidates": ["speak", "__init__", "name"],
        "force_popup": True,
        "object_expression": "pet",
        "prefix": "sp",
    }


def test_cli_complete_uses_project_templates(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    source = _write_source(tmp_path, "value = 1\n")
    (tmp_path / "symlex.toml").write_text(
        '[completion.templates]\nwithopen = "with open(path) as fh:\\n    "\n',
        encoding="utf-8",
    )

    exit_code = main(["complete", str(source), "wi"])

    assert exit_code == 0
    candidates = json.loads(capsys.readouterr().out)["candidates"]
    assert "withopen" in candidates
    assert "value" in candidates
    assert "print" in candidates


def test_cli_locate(
    tmp_path: Path, sample_source: str, capsys: pytest.CaptureFixture[str]
) -> None:
    source = _write_source(tmp_path, sample_source)

    exit_code = main(["locate", str(source), "32", "9"])

    assert exit_code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["symbol"]["name"] == ""
    assert payload["definition"]["name"] == "Animal"
    assert payload["definition"]["kind"] == "class"
    assert (payload["definition"]["line"], payload["definition"]["column"]) == (5, 7)


def test_cli_unknown_extension_uses_configured_language(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    source = _write_source(tmp_path, "class Job:\n    pass\n", name="job.txt")

    exit_code = main(["symbols", str(source)])

    assert exit_code == 0
    assert "Job" in json.loads(capsys.readouterr().out)["symbols"]


def test_cli_missing_file_is_usage_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    exit_code = main(["symbols", str(tmp_path / "absent.py")])

    assert exit_code == 2
    assert "error:" in capsys.readouterr().err


def test_cli_index_smoke(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    repo_root.mkdir()
    _write_minimal_repo(repo_root)

    out_dir = tmp_path / "artifacts"
    exit_code = main(["index", str(repo_root), "--out-dir", str(out_dir)])

    assert exit_code == 0
    assert out_dir.exists()
    assert any(out_dir.iterdir())


def test_cli_index_default_output_dir_from_fixture(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _copy_mini_repo_fixture(repo_root)

    assert not (repo_root / ".symlex").exists(), "output dir must not pre-exist"
    exit_code = main(["index", str(repo_root)])

    default_out_dir = repo_root / ".symlex"
    assert exit_code == 0
    assert default_out_dir.exists()
    assert main(["validate", str(repo_root)]) == 0
    assert main(["verify", str(repo_root)]) == 0


def test_cli_index_rejects_bad_config(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    repo_root = tmp_path / "repo"
    repo_root.mkdir()
    _write_minimal_repo(repo_root)
    (repo_root / "symlex.toml").write_text(
        '[index]\noutput_dir = "../outside"\n', encoding="utf-8"
    )

    exit_code = main(["index", str(repo_root)])

    assert exit_code == 2
    assert "escapes the project root" in capsys.readouterr().err


def test_cli_validate_default_artifacts_dir_reports_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    repo_root = tmp_path / "repo"
    repo_root.mkdir()
    _write_minimal_repo(repo_root)
    default_artifacts_dir = (
        repo_root / load_config(repo_root).index.output_dir
    ).resolve()

    monkeypatch.chdir(repo_root)
    exit_code = main(["validate"])

    assert exit_code == 1
    captured = capsys.readouterr()
    assert f"{default_artifacts_dir}:" in captured.err
    assert "Artifacts directory does not exist." in captured.err


def test_cli_validate_includes_path_and_message(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    artifacts_dir = tmp_path / "missing-artifacts"

    exit_code = main(["validate", str(tmp_path), "--artifacts-dir", str(artifacts_dir)])

    assert exit_code == 1
    captured = capsys.readouterr()
    assert f"{artifacts_dir}:" in captured.err
    assert "Artifacts directory does not exist." in captured.err


def test_cli_verify_missing_artifacts_dir_reports_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    repo_root = tmp_path / "repo"
    repo_root.mkdir()
    _write_minimal_repo(repo_root)

    artifacts_dir = tmp_path / "missing-artifacts"
    exit_code = main(["verify", str(repo_root), "--artifacts-dir", str(artifacts_dir)])

    assert exit_code == 2
    captured = capsys.readouterr()
    assert f"artifacts-dir: {artifacts_dir}" in captured.err
    assert "Artifacts directory does not exist" in captured.err


def test_cli_verify_reports_mismatch(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    repo_root = tmp_path / "repo"
    repo_root.mkdir()
    _write_minimal_repo(repo_root)
    out_dir = tmp_path / "artifacts"
    assert main(["index", str(repo_root), "--out-dir", str(out_dir)]) == 0

    (repo_root / "pkg" / "module.py").write_text("changed = 1\n", encoding="utf-8")
    exit_code = main(["verify", str(repo_root), "--artifacts-dir", str(out_dir)])

    assert exit_code == 1
    assert "mismatches: symbols.jsonl" in capsys.readouterr().err
