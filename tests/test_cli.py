"""Tests for the command-line entry point and validate command."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from taskboard.__main__ import main, parse_args
from taskboard.cli.output import board_summary, error, report_problems, success
from taskboard.cli.validate import run_validate
from taskboard.config import Settings
from taskboard.models import Board, StoreConfig

VALID_BOARD = {
    "tasks": {"t1": {"id": "t1", "title": "One", "division": "", "priority": "low"}},
    "columns": {"todo": {"id": "todo", "title": "To Do", "taskIds": ["t1"]}},
    "columnOrder": ["todo"],
}


def write_board(path: Path, data) -> Path:
    path.write_text(json.dumps(data))
    return path


class TestParseArgs:
    """Tests for argument parsing."""

    def test_defaults(self):
        args = parse_args([])

        assert args.project_root is None
        assert not args.generate
        assert not args.serve
        assert args.validate is None
        assert args.verbose == 0

    def test_verbosity_counts(self):
        assert parse_args(["-vv"]).verbose == 2

    def test_serve_options(self):
        args = parse_args(["--serve", "--host", "0.0.0.0", "--port", "8080"])

        assert args.serve
        assert args.host == "0.0.0.0"
        assert args.port == 8080

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["--version"])

        assert exc_info.value.code == 0
        assert "taskboard 0.1.0" in capsys.readouterr().out


class TestRunValidate:
    """Tests for run_validate."""

    def test_valid_board(self, tmp_path: Path, capsys):
        path = write_board(tmp_path / "board.json", VALID_BOARD)

        assert run_validate(path) == 0
        assert "1 columns, 1 tasks, valid" in capsys.readouterr().out

    def test_reports_each_violation(self, tmp_path: Path, capsys):
        bad = {**VALID_BOARD, "columnOrder": ["todo", "ghost"]}
        bad["columns"] = {"todo": {"id": "todo", "title": "To Do", "taskIds": ["t1", "t9"]}}
        path = write_board(tmp_path / "board.json", bad)

        assert run_validate(path) == 1

        out = capsys.readouterr().out
        assert "unknown task 't9'" in out
        assert "unknown column 'ghost'" in out
        assert "2 problem(s)" in out

    def test_missing_file(self, tmp_path: Path, capsys):
        assert run_validate(tmp_path / "nope.json") == 1
        assert "No board saved" in capsys.readouterr().out

    def test_malformed_file(self, tmp_path: Path):
        path = tmp_path / "board.json"
        path.write_text("[1, 2")
        assert run_validate(path) == 1


class TestMain:
    """Tests for main() dispatch."""

    def test_generate(self, tmp_path: Path):
        with pytest.raises(SystemExit) as exc_info:
            main(["--project-root", str(tmp_path), "--generate"])

        assert exc_info.value.code == 0
        assert (tmp_path / "taskboard.yml").exists()

    def test_validate(self, tmp_path: Path):
        path = write_board(tmp_path / "board.json", VALID_BOARD)

        with pytest.raises(SystemExit) as exc_info:
            main(["--validate", str(path)])

        assert exc_info.value.code == 0

    def test_serve_uses_config_and_overrides(self, tmp_path: Path):
        (tmp_path / "taskboard.yml").write_text("server:\n  port: 4100\n  database: db/x.db\n")

        with (
            patch("taskboard.cli.serve.run_server") as run_server,
            pytest.raises(SystemExit) as exc_info,
        ):
            main(["--project-root", str(tmp_path), "--serve", "--host", "0.0.0.0"])

        assert exc_info.value.code == 0
        database = run_server.call_args.args[0]
        assert database.db_path == str(tmp_path / "db" / "x.db")
        assert run_server.call_args.kwargs == {"host": "0.0.0.0", "port": 4100}

    def test_default_runs_tui(self, tmp_path: Path):
        with patch("taskboard.app.run") as run:
            main(["--project-root", str(tmp_path)])

        settings = run.call_args.args[0]
        assert settings.project_root == tmp_path


class TestOutput:
    """Tests for the command output helpers."""

    def test_plain_marks_when_not_a_terminal(self, capsys):
        success("ok")
        error("bad")

        assert capsys.readouterr().out == "✓ ok\n✗ bad\n"

    def test_report_problems_numbers_lines(self, capsys):
        problems = [f"problem {i}" for i in range(1, 11)]

        report_problems("board.json", problems)

        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "✗  1. problem 1"
        assert lines[9] == "✗ 10. problem 10"
        assert lines[10] == "• 10 problem(s) in board.json"

    def test_board_summary(self):
        board = Board.from_columns([("todo", "To Do"), ("done", "Done")])
        assert board_summary(board) == "2 columns, 0 tasks"


class TestSettings:
    """Tests for process settings."""

    def test_env_prefix(self, monkeypatch, tmp_path: Path):
        monkeypatch.setenv("TASKBOARD_PROJECT_ROOT", str(tmp_path))
        monkeypatch.setenv("TASKBOARD_VERBOSE", "2")

        settings = Settings()

        assert settings.project_root == tmp_path
        assert settings.verbose == 2

    def test_store_url_switches_to_http(self):
        settings = Settings(store_url="http://board.local:3001")

        store = settings.resolve_store(StoreConfig(cache=".taskboard/snap.json"))

        assert store.backend == "http"
        assert store.url == "http://board.local:3001"
        assert store.cache == ".taskboard/snap.json"

    def test_no_store_url_keeps_config(self):
        store = StoreConfig()
        assert Settings().resolve_store(store) is store

    def test_store_url_must_be_http(self):
        with pytest.raises(ValidationError):
            Settings(store_url="ftp://nope")

    def test_store_url_flag(self, tmp_path: Path):
        with patch("taskboard.app.run") as run:
            main(["--project-root", str(tmp_path), "--store-url", "http://h:1"])

        assert run.call_args.args[0].store_url == "http://h:1"
