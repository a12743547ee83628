"""Tests for the save file storage."""

import pytest
import frontmatter

from taskbot_cli.domain import Task, TaskKind, TaskList
from taskbot_cli.exceptions import StorageError
from taskbot_cli.storage import Storage, TaskMarkdownFormat


@pytest.fixture
def sample_tasks():
    done_deadline = Task.deadline("submit report", "Jan 01 2024")
    done_deadline.mark_as_done()
    return TaskList([
        Task.todo("read book"),
        done_deadline,
        Task.event("party /by the sea", "Dec 02 2019, 06:00 PM"),
    ])


class TestTaskMarkdownFormat:
    """Test conversion of single tasks to checklist lines."""

    def test_to_markdown(self, sample_tasks):
        lines = [TaskMarkdownFormat.to_markdown(t) for t in sample_tasks]
        assert lines == [
            "- [ ] todo: read book",
            "- [x] deadline: submit report /by Jan 01 2024",
            "- [ ] event: party /by the sea /at Dec 02 2019, 06:00 PM",
        ]

    def test_from_markdown(self):
        task = TaskMarkdownFormat.from_markdown("- [x] event: party /at Sunday")
        assert task == Task(TaskKind.EVENT, "party", done=True, when="Sunday")

    def test_non_task_lines_ignored(self):
        assert TaskMarkdownFormat.from_markdown("") is None
        assert TaskMarkdownFormat.from_markdown("# Tasks") is None
        assert TaskMarkdownFormat.from_markdown("- [ ] chore: sweep") is None

    def test_timed_line_without_separator(self):
        with pytest.raises(ValueError):
            TaskMarkdownFormat.from_markdown("- [ ] deadline: submit report")


class TestStorage:
    """Test loading and saving the task list."""

    def test_missing_file_loads_empty(self, tmp_path):
        storage = Storage(tmp_path / "tasks.md")
        assert len(storage.load()) == 0

    def test_save_and_load(self, tmp_path, sample_tasks):
        storage = Storage(tmp_path / "nested" / "tasks.md")

        assert storage.save(sample_tasks) is True
        loaded = storage.load()

        assert [t.render() for t in loaded] == [t.render() for t in sample_tasks]

    def test_frontmatter_metadata(self, tmp_path, sample_tasks):
        storage = Storage(tmp_path / "tasks.md")
        storage.save(sample_tasks)

        post = frontmatter.load(str(storage.save_path))
        assert post.metadata["format_version"] == 1
        assert post.metadata["total"] == 3
        assert post.metadata["completed"] == 1
        assert "saved" in post.metadata

    def test_save_rewrites_whole_file(self, tmp_path, sample_tasks):
        storage = Storage(tmp_path / "tasks.md")
        storage.save(sample_tasks)

        sample_tasks.delete(0)
        storage.save(sample_tasks)

        content = storage.save_path.read_text(encoding="utf-8")
        assert "read book" not in content
        assert len(storage.load()) == 2

    def test_multiline_input_reloads_as_one_task(self, parser, storage):
        """Text with line breaks cannot add extra tasks to the save file."""
        parser.process_input("todo buy milk\n- [x] todo: injected")

        loaded = storage.load()

        assert len(loaded) == len(parser.tasks) == 1
        assert [t.render() for t in loaded] == ["[T][ ] buy milk - [x] todo: injected"]

    def test_bad_lines_skipped(self, tmp_path):
        path = tmp_path / "tasks.md"
        path.write_text(
            "# Tasks\n\n"
            "- [ ] todo: read book\n"
            "- [ ] deadline: missing separator\n"
            "- [x] event: party /at Sunday\n",
            encoding="utf-8",
        )

        loaded = Storage(path).load()

        assert [t.render() for t in loaded] == ["[T][ ] read book", "[E][X] party (at: Sunday)"]

    def test_corrupt_frontmatter(self, tmp_path):
        path = tmp_path / "tasks.md"
        path.write_text("---\ntotal: [unclosed\n---\n- [ ] todo: a\n", encoding="utf-8")

        with pytest.raises(StorageError):
            Storage(path).load()

    def test_save_failure_returns_false(self, tmp_path, sample_tasks):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")

        storage = Storage(blocker / "tasks.md")
        assert storage.save(sample_tasks) is False

    def test_backup(self, tmp_path, sample_tasks):
        storage = Storage(tmp_path / "tasks.md", backup_dir=tmp_path / "backups")
        assert storage.backup() is None

        storage.save(sample_tasks)
        backup_path = storage.backup()

        assert backup_path is not None
        assert backup_path.read_text(encoding="utf-8") == storage.save_path.read_text(encoding="utf-8")
        assert storage.list_backups() == [backup_path]
