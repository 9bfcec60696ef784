"""Tests for the todomd command line entry point."""

from pathlib import Path

import pytest

from todomd import __main__ as cli
from todomd.config import TODO_FILE_ENV, Config


@pytest.fixture
def no_env(monkeypatch):
    monkeypatch.delenv(TODO_FILE_ENV, raising=False)


class TestResolveTodoFile:
    def test_flag_wins(self, monkeypatch):
        monkeypatch.setenv(TODO_FILE_ENV, "/env.md")
        config = Config(todo_file="/config.md")
        assert cli.resolve_todo_file("/flag.md", config) == Path("/flag.md")

    def test_env_before_config(self, monkeypatch):
        monkeypatch.setenv(TODO_FILE_ENV, "/env.md")
        assert cli.resolve_todo_file("", Config(todo_file="/config.md")) == Path("/env.md")

    def test_config_fallback(self, no_env):
        assert cli.resolve_todo_file("", Config(todo_file="/config.md")) == Path("/config.md")

    def test_nothing_set(self, no_env):
        assert cli.resolve_todo_file("", Config()) is None


class TestReturnPaths:
    def test_splits_and_skips(self, tmp_path, capsys):
        a = tmp_path / "a.md"
        b = tmp_path / "b.md"
        a.write_text("")
        b.write_text("")
        value = f" {a} ,, {tmp_path / 'missing.md'},{b}"

        assert cli.parse_return_paths(value) == [a, b]
        assert "Warning: return path not found" in capsys.readouterr().err

    def test_empty(self):
        assert cli.parse_return_paths("") == []


class TestMain:
    def test_version(self, capsys):
        assert cli.main(["--version"]) == 0
        assert capsys.readouterr().out.startswith("todomd ")

    def test_no_file(self, config_dir, no_env, capsys):
        assert cli.main([]) == 1
        assert "no todo file specified" in capsys.readouterr().err

    def test_missing_file(self, config_dir, tmp_path, capsys):
        assert cli.main(["-f", str(tmp_path / "missing.md")]) == 1
        assert "file not found" in capsys.readouterr().err

    def test_runs_app(self, config_dir, sample_todo, tmp_path, monkeypatch):
        back = tmp_path / "back.md"
        back.write_text("- [ ] Back\n")
        calls = []
        monkeypatch.setattr(cli, "run_app", lambda session, config: calls.append(session))

        assert cli.main(["--file", str(sample_todo), "--return", str(back)]) == 0

        session = calls[0]
        assert session.todo_file.todo_count() == 4
        assert session.depth == 1

    def test_load_failure_is_fatal(self, config_dir, tmp_path, capsys):
        folder = tmp_path / "folder.md"
        folder.mkdir()
        assert cli.main(["-f", str(folder)]) == 1
        assert "Error: loading file" in capsys.readouterr().err
