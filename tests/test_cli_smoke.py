from __future__ import annotations

import json
import logging
import os
from pathlib import Path

import pytest
from typer.testing import CliRunner

from textblocks.cli import app


runner = CliRunner()

INT_EXAMPLE = "1000\n2000\n3000\n\n4000\n\n5000\n6000\n\n7000\n8000\n9000\n\n10000"
_ENV_VARS = ("TEXTBLOCKS_DELIMITER", "TEXTBLOCKS_LOG_LEVEL", "TEXTBLOCKS_JSON_LOGS")


@pytest.fixture(autouse=True)
def _isolated(monkeypatch, tmp_path: Path):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    # --env-file values are loaded into os.environ
    for name in _ENV_VARS:
        os.environ.pop(name, None)


def _write(tmp_path: Path, text: str, name: str = "input.txt") -> Path:
    path = tmp_path / name
    path.write_bytes(text.encode("utf-8"))
    return path


def test_cli_help_lists_subcommands():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "split" in result.stdout
    assert "reduce" in result.stdout


def test_split_plain(tmp_path: Path):
    path = _write(tmp_path, "100\n200\n\n300\n400\n\n500\n600\n")
    result = runner.invoke(app, ["split", str(path)])
    assert result.exit_code == 0
    assert result.stdout == "100\n200\n\n300\n400\n\n500\n600\n"


def test_split_json(tmp_path: Path):
    path = _write(tmp_path, "abc\n\na\nb\nc")
    result = runner.invoke(app, ["split", str(path), "--json"])
    assert result.exit_code == 0
    assert json.loads(result.stdout) == [["abc"], ["a", "b", "c"]]


def test_split_keeps_crlf_detection(tmp_path: Path):
    path = _write(tmp_path, "a\r\nb\r\n\r\nc\r\n")
    result = runner.invoke(app, ["split", str(path), "--json"])
    assert result.exit_code == 0
    assert json.loads(result.stdout) == [["a", "b"], ["c"]]


def test_split_explicit_delimiter(tmp_path: Path):
    path = _write(tmp_path, "abc\n***\na\nb")
    result = runner.invoke(app, ["split", str(path), "-d", "***", "--json"])
    assert result.exit_code == 0
    assert json.loads(result.stdout) == [["abc"], ["a", "b"]]


def test_split_delimiter_from_env_file(tmp_path: Path):
    env_file = _write(tmp_path, "TEXTBLOCKS_DELIMITER=---\n", name="custom.env")
    path = _write(tmp_path, "a\n---\nb")
    result = runner.invoke(
        app, ["--env-file", str(env_file), "split", str(path), "--json"]
    )
    assert result.exit_code == 0
    assert json.loads(result.stdout) == [["a"], ["b"]]


def test_split_stdin():
    result = runner.invoke(app, ["split", "-", "--json"], input="x\ny\n\nz\n")
    assert result.exit_code == 0
    assert json.loads(result.stdout) == [["x", "y"], ["z"]]


def test_split_empty_file(tmp_path: Path):
    path = _write(tmp_path, "  \n\n")
    result = runner.invoke(app, ["split", str(path), "--json"])
    assert result.exit_code == 0
    assert json.loads(result.stdout) == []


def test_split_pattern_delimiter_fails(tmp_path: Path):
    path = _write(tmp_path, "a\n\nb")
    result = runner.invoke(app, ["split", str(path), "-d", "pattern:\\n+"])
    assert result.exit_code == 1
    assert "not implemented" in result.stderr


def test_split_missing_file_returns_error():
    result = runner.invoke(app, ["split", "missing.txt"])
    assert result.exit_code == 1
    assert "Input path does not exist" in result.stderr


@pytest.mark.parametrize(
    ("op", "expected"),
    [
        ("sum", [6000, 4000, 11000, 24000, 10000]),
        ("min", [1000, 4000, 5000, 7000, 10000]),
        ("max", [3000, 4000, 6000, 9000, 10000]),
        ("range", [2000, 0, 1000, 2000, 0]),
        ("count", [3, 1, 2, 3, 1]),
    ],
)
def test_reduce_ops(tmp_path: Path, op: str, expected: list[int]):
    path = _write(tmp_path, INT_EXAMPLE)
    result = runner.invoke(app, ["reduce", str(path), "--op", op, "--json"])
    assert result.exit_code == 0
    assert json.loads(result.stdout) == expected


def test_reduce_plain_output(tmp_path: Path):
    path = _write(tmp_path, "100\n200\n\n300\n400\n\n500\n600")
    result = runner.invoke(app, ["reduce", str(path)])
    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["300", "700", "1100"]


def test_reduce_bad_line_reports_location(tmp_path: Path):
    path = _write(tmp_path, "1\n2\n\nthree")
    result = runner.invoke(app, ["reduce", str(path)])
    assert result.exit_code == 1
    assert "invalid literal" in result.stderr
    assert "block 1, line 0" in result.stderr


def test_reduce_unknown_op_is_usage_error(tmp_path: Path):
    path = _write(tmp_path, "1")
    result = runner.invoke(app, ["reduce", str(path), "--op", "median"])
    assert result.exit_code == 2


def test_invalid_log_level_env(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("TEXTBLOCKS_LOG_LEVEL", "LOUD")
    path = _write(tmp_path, "a")
    result = runner.invoke(app, ["split", str(path)])
    assert result.exit_code == 1
    assert "Invalid textblocks settings" in result.stderr


def test_debug_logs_go_to_stderr(tmp_path: Path):
    path = _write(tmp_path, "a\n\nb")
    result = runner.invoke(
        app, ["--log-level", "DEBUG", "--json-logs", "split", str(path), "--json"]
    )
    assert result.exit_code == 0
    assert json.loads(result.stdout) == [["a"], ["b"]]
    assert "split document into 2 blocks" in result.stderr
