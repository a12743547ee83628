"""Tests for the click entry point."""

import pytest
from click.testing import CliRunner

from taskbot_cli import cli as cli_module
from taskbot_cli.cli import main
from taskbot_cli.storage import Storage


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    """Keep CliRunner streams out of the root logger."""
    monkeypatch.setattr(cli_module, "setup_logging", lambda *args, **kwargs: None)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def base_args(tmp_path):
    return ["--config", str(tmp_path / "config.yaml"), "--data-file", str(tmp_path / "tasks.md")]


class TestRunCommand:
    """Test one-shot command execution."""

    def test_run_adds_task(self, runner, base_args, tmp_path):
        result = runner.invoke(main, base_args + ["run", "todo", "read", "book"])

        assert result.exit_code == 0
        assert "[T][ ] read book" in result.output
        assert "Now you have 1 task in the list." in result.output
        assert [t.description for t in Storage(tmp_path / "tasks.md").load()] == ["read book"]

    def test_run_multiline_argument(self, runner, base_args, tmp_path):
        result = runner.invoke(main, base_args + ["run", "todo", "buy milk\n- [x] todo: injected"])

        assert result.exit_code == 0
        assert "Now you have 1 task in the list." in result.output
        loaded = Storage(tmp_path / "tasks.md").load()
        assert [t.render() for t in loaded] == ["[T][ ] buy milk - [x] todo: injected"]

    def test_run_invalid_command_exits_with_error(self, runner, base_args):
        result = runner.invoke(main, base_args + ["run", "done", "1"])

        assert result.exit_code == 1
        assert "Which task have you done?" in result.output

    def test_corrupt_save_file(self, runner, base_args, tmp_path):
        (tmp_path / "tasks.md").write_text("---\ntotal: [unclosed\n---\n", encoding="utf-8")

        result = runner.invoke(main, base_args + ["run", "list"])

        assert result.exit_code == 1
        assert "Could not load tasks" in result.output


class TestChat:
    """Test the interactive loop."""

    def test_session_until_bye(self, runner, base_args):
        result = runner.invoke(
            main,
            base_args + ["chat"],
            input="todo read book\n\nfoo\nlist\nbye\ntodo never added\n",
        )

        assert result.exit_code == 0
        assert "Got it. I've added this task:" in result.output
        assert "I'm sorry, but I don't know what that means." in result.output
        assert "1. [T][ ] read book" in result.output
        assert "Bye. Hope to see you again soon!" in result.output
        assert "never added" not in result.output

    def test_default_command_is_chat(self, runner, base_args, tmp_path):
        result = runner.invoke(main, base_args, input="deadline report /by 2024-01-01\n")

        assert result.exit_code == 0
        assert "[D][ ] report (by: Jan 01 2024)" in result.output
        assert len(Storage(tmp_path / "tasks.md").load()) == 1

    def test_tasks_persist_between_sessions(self, runner, base_args):
        runner.invoke(main, base_args + ["chat"], input="todo a\ntodo b\nbye\n")
        result = runner.invoke(main, base_args + ["chat"], input="delete 1\nlist\nbye\n")

        assert "Noted. I've removed this task:" in result.output
        assert "1. [T][ ] b" in result.output


class TestBackup:
    def test_backup_without_save_file(self, runner, base_args):
        result = runner.invoke(main, base_args + ["backup"])
        assert result.exit_code == 1
        assert "Nothing to back up" in result.output

    def test_backup(self, runner, base_args, tmp_path):
        runner.invoke(main, base_args + ["run", "todo", "a"])

        result = runner.invoke(main, base_args + ["backup"])

        assert result.exit_code == 0
        assert "Backed up to" in result.output
