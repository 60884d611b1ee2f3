from __future__ import annotations

import json
from pathlib import Path
import subprocess
import sys

REPO_ROOT = Path(__file__).resolve().parents[1]
CLI = [sys.executable, "-m", "pluginkit.cli.main"]

GACK_ID = "963190677-320016 (165202460)"


def run_cli(*args: str, expected: int = 0, stdin: str | None = None) -> subprocess.CompletedProcess[str]:
    proc = subprocess.run(
        [*CLI, *args],
        cwd=REPO_ROOT,
        text=True,
        input=stdin,
        capture_output=True,
        check=False,
    )
    if proc.returncode != expected:
        raise AssertionError(
            "CLI returned unexpected exit code\n"
            f"cmd: {' '.join([*CLI, *args])}\n"
            f"expected: {expected}\n"
            f"actual: {proc.returncode}\n"
            f"stdout:\n{proc.stdout}\n"
            f"stderr:\n{proc.stderr}"
        )
    return proc


def run_json(*args: str, expected: int = 0, stdin: str | None = None) -> dict:
    proc = run_cli(*args, expected=expected, stdin=stdin)
    return json.loads(proc.stdout)


def write_record(tmp_path: Path, record: dict) -> Path:
    path = tmp_path / "error.json"
    path.write_text(json.dumps(record), encoding="utf-8")
    return path


def test_parse_duration_json() -> None:
    payload = run_json("--json", "parse-duration", "10", "--unit", "minutes")

    assert payload["ok"] is True
    assert payload["command"] == "parse-duration"
    assert payload["schema"] == "pluginkit.cli.parse_duration.success.v1"
    assert payload["data"] == {"quantity": 10, "unit": "minutes", "seconds": 600.0}


def test_parse_duration_human_output() -> None:
    proc = run_cli("parse-duration", "1", "--unit", "HOURS")
    assert "parsed 1 hour" in proc.stdout


def test_parse_duration_invalid_value() -> None:
    payload = run_json("--json", "parse-duration", "abc", "--unit", "minutes", expected=2)

    assert payload["ok"] is False
    assert payload["schema"] == "pluginkit.cli.parse_duration.error.v1"
    error = payload["errors"][0]
    assert error["name"] == "InvalidDurationError"
    assert error["exitCode"] == 2
    assert error["commandName"] == "parse-duration"
    assert error["context"] == "parse-duration"


def test_parse_duration_bounds_human_output() -> None:
    proc = run_cli("parse-duration", "5", "--unit", "minutes", "--min", "10", expected=2)
    assert "error: The value must be between 10 and unbounded (inclusive)." in proc.stderr


def test_parse_duration_zero_min_is_ignored() -> None:
    payload = run_json("--json", "parse-duration", "5", "--unit", "minutes", "--min", "0")
    assert payload["data"]["quantity"] == 5


def test_parse_duration_unknown_unit_is_usage_error() -> None:
    run_cli("parse-duration", "5", "--unit", "fortnights", expected=2)


def test_classify_gack_record(tmp_path: Path) -> None:
    record = write_record(
        tmp_path,
        {"message": "outer", "exitCode": 3, "cause": {"message": f"Error ID: {GACK_ID}"}},
    )
    payload = run_json("--json", "classify", "--in", str(record), "--command-name", "deploy")

    assert payload["ok"] is True
    assert payload["data"]["gack"] is True
    assert payload["data"]["exit_code"] == 20
    report = payload["data"]["report"]
    assert report["commandName"] == "deploy"
    assert report["exitCode"] == 20


def test_classify_from_stdin_with_default_exit_code() -> None:
    payload = run_json(
        "--json",
        "classify",
        "--in",
        "-",
        "--default-exit-code",
        "7",
        stdin=json.dumps({"message": "plain failure"}),
    )
    assert payload["data"]["exit_code"] == 7
    assert payload["data"]["type_error"] is False


def test_classify_non_numeric_code(tmp_path: Path) -> None:
    record = write_record(tmp_path, {"message": "x", "code": "ENOENT"})
    payload = run_json("--json", "classify", "--in", str(record))
    assert payload["data"]["exit_code"] == 1


def test_classify_missing_file(tmp_path: Path) -> None:
    payload = run_json("--json", "classify", "--in", str(tmp_path / "missing.json"), expected=2)

    assert payload["ok"] is False
    error = payload["errors"][0]
    assert error["name"] == "InvalidErrorRecordError"
    assert "missing.json" in error["message"]
    assert error["actions"]


def test_classify_rejects_non_object(tmp_path: Path) -> None:
    path = tmp_path / "list.json"
    path.write_text("[1, 2]", encoding="utf-8")
    run_cli("classify", "--in", str(path), expected=2)
