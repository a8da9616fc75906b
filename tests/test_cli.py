"""Tests for the command line interface."""

from pathlib import Path

import pytest

from taskquery.__main__ import main, parse_args


@pytest.fixture
def task_root(tmp_path: Path) -> Path:
    """Directory with a small task file."""
    (tmp_path / "tasks.yaml").write_text(
        """
- path: notes/a.md
  line: 1
  raw_text: "- TODO write report #work"
  text: "write report #work"
  state: TODO
- path: notes/b.md
  line: 4
  raw_text: "- DONE buy milk #home"
  text: "buy milk #home"
  state: DONE
"""
    )
    return tmp_path


def run_cli(*argv: str) -> int:
    with pytest.raises(SystemExit) as exc_info:
        main(list(argv))
    return exc_info.value.code


class TestParseArgs:
    """Tests for argument parsing."""

    def test_defaults(self):
        args = parse_args(["tag:work"])
        assert args.query == "tag:work"
        assert args.case_sensitive is None
        assert args.check is False
        assert args.verbose == 0

    def test_flags(self):
        args = parse_args(["x", "-c", "--check", "-vv", "--task-root", "/tmp/vault"])
        assert args.case_sensitive is True
        assert args.check is True
        assert args.verbose == 2
        assert args.task_root == Path("/tmp/vault")


class TestMain:
    """Tests for running queries from the command line."""

    def test_prints_matches(self, task_root: Path, capsys):
        code = run_cli("tag:work", "--task-root", str(task_root))

        captured = capsys.readouterr()
        assert code == 0
        assert captured.out.strip() == "notes/a.md:1: - TODO write report #work"
        assert "1 of 2 tasks matched" in captured.err

    def test_explicit_task_file(self, task_root: Path, tmp_path: Path, capsys):
        code = run_cli(
            "--tasks", str(task_root / "tasks.yaml"), "--task-root", str(tmp_path), "--", "-state:DONE"
        )

        assert code == 0
        assert "notes/a.md:1:" in capsys.readouterr().out

    def test_check_valid(self, task_root: Path, capsys):
        code = run_cli("tag:work", "--check", "--task-root", str(task_root))

        assert code == 0
        assert "Query is valid" in capsys.readouterr().out

    def test_invalid_query(self, task_root: Path, capsys):
        code = run_cli("meeting OR", "--task-root", str(task_root))

        assert code == 1
        assert "Invalid query: Unexpected end of expression" in capsys.readouterr().err

    def test_missing_task_file(self, tmp_path: Path, capsys):
        code = run_cli("tag:work", "--task-root", str(tmp_path))

        assert code == 1
        assert "Task file not found" in capsys.readouterr().err

    def test_task_file_from_environment(self, task_root: Path, tmp_path: Path, monkeypatch, capsys):
        monkeypatch.setenv("TASKQUERY_TASKS_FILE", str(task_root / "tasks.yaml"))
        code = run_cli("state:DONE", "--task-root", str(tmp_path / "elsewhere"))

        assert code == 0
        assert "notes/b.md:4:" in capsys.readouterr().out
