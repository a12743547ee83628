"""Storage layer for Taskbot CLI using a markdown checklist with YAML frontmatter."""

import logging
import re
import shutil
from pathlib import Path
from typing import List, Optional, Union

import frontmatter
import yaml

from .config import ConfigModel
from .domain import Task, TaskKind, TaskList
from .exceptions import StorageError
from .utils.datetime import now_utc, to_iso_string

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1

TASK_LINE_RE = re.compile(r"^- \[( |x|X)\] (todo|deadline|event): (.*)$")

# Separator between description and date/time for the timed variants
WHEN_SEPARATORS = {
    TaskKind.DEADLINE: " /by ",
    TaskKind.EVENT: " /at ",
}


class TaskMarkdownFormat:
    """Handles conversion between Task objects and checklist lines."""

    @staticmethod
    def to_markdown(task: Task) -> str:
        """Convert Task to a single checklist line."""
        checkbox = "- [x]" if task.done else "- [ ]"
        line = f"{checkbox} {task.kind.value}: {task.description}"
        if task.kind in WHEN_SEPARATORS:
            line += f"{WHEN_SEPARATORS[task.kind]}{task.when}"
        return line

    @staticmethod
    def from_markdown(line: str) -> Optional[Task]:
        """Parse a checklist line back to a Task.

        Returns None for lines that are not task lines (headings, blanks).

        Raises:
            ValueError: If the line looks like a task but cannot be rebuilt.
        """
        line = line.strip()
        if not line:
            return None

        match = TASK_LINE_RE.match(line)
        if not match:
            return None

        done = match.group(1) in ("x", "X")
        kind = TaskKind(match.group(2))
        body = match.group(3)

        when = None
        if kind in WHEN_SEPARATORS:
            description, separator, when = body.partition(WHEN_SEPARATORS[kind])
            if not separator:
                raise ValueError(f"missing '{WHEN_SEPARATORS[kind].strip()}' in {kind.value} line")
        else:
            description = body

        return Task(kind=kind, description=description, done=done, when=when)


class TaskFileFormat:
    """Handles conversion between a TaskList and the save file contents."""

    @staticmethod
    def to_markdown(tasks: TaskList) -> str:
        """Convert the task list to markdown with YAML frontmatter."""
        content_lines = ["# Tasks", ""]
        content_lines.extend(TaskMarkdownFormat.to_markdown(task) for task in tasks)

        post = frontmatter.Post(
            "\n".join(content_lines),
            format_version=FORMAT_VERSION,
            saved=to_iso_string(now_utc()),
            total=len(tasks),
            completed=sum(1 for task in tasks if task.done),
        )
        return frontmatter.dumps(post)

    @staticmethod
    def from_markdown(content: str) -> TaskList:
        """Parse save file contents back to a TaskList.

        Lines that look like tasks but cannot be rebuilt are skipped with a
        warning so that one bad line does not lose the rest of the list.
        """
        post = frontmatter.loads(content)

        version = post.metadata.get("format_version", FORMAT_VERSION)
        if version != FORMAT_VERSION:
            logger.warning("Save file format version %s, expected %s", version, FORMAT_VERSION)

        tasks = TaskList()
        for line_no, line in enumerate(post.content.split("\n"), start=1):
            try:
                task = TaskMarkdownFormat.from_markdown(line)
            except ValueError as e:
                logger.warning("Skipping unreadable task on line %d: %s", line_no, e)
                continue
            if task:
                tasks.add(task)

        return tasks


class Storage:
    """File-based storage for Taskbot CLI.

    The whole save file is rewritten after every change to the task list.
    """

    def __init__(self, save_path: Union[str, Path], backup_dir: Optional[Union[str, Path]] = None):
        self.save_path = Path(save_path)
        self.backup_dir = Path(backup_dir) if backup_dir else self.save_path.parent / "backups"

    @classmethod
    def from_config(cls, config: ConfigModel) -> "Storage":
        return cls(config.get_save_path(), config.get_backup_path())

    def load(self) -> TaskList:
        """Load the task list from the save file.

        A missing save file yields an empty list.

        Raises:
            StorageError: If the file exists but cannot be read or parsed.
        """
        if not self.save_path.exists():
            logger.info("No save file at %s, starting with an empty task list", self.save_path)
            return TaskList()

        try:
            with open(self.save_path, "r", encoding="utf-8") as f:
                content = f.read()
            tasks = TaskFileFormat.from_markdown(content)
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            raise StorageError(f"Could not load tasks from {self.save_path}: {e}", self.save_path) from e

        logger.debug("Loaded %d task(s) from %s", len(tasks), self.save_path)
        return tasks

    def save(self, tasks: TaskList) -> bool:
        """Rewrite the save file with the given task list."""
        try:
            content = TaskFileFormat.to_markdown(tasks)
            self.save_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.save_path, "w", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            logger.error("Error saving tasks to %s: %s", self.save_path, e)
            return False

        logger.debug("Saved %d task(s) to %s", len(tasks), self.save_path)
        return True

    def backup(self) -> Optional[Path]:
        """Copy the save file into the backup directory.

        Returns:
            Path of the backup, or None if there is nothing to back up.
        """
        if not self.save_path.exists():
            return None

        timestamp = now_utc().strftime("%Y-%m-%d_%H-%M-%S")
        backup_path = self.backup_dir / f"{self.save_path.stem}_{timestamp}{self.save_path.suffix}"

        try:
            self.backup_dir.mkdir(parents=True, exist_ok=True)
            shutil.copy2(self.save_path, backup_path)
        except OSError as e:
            logger.error("Error backing up %s: %s", self.save_path, e)
            return None

        logger.info("Backed up %s to %s", self.save_path, backup_path)
        return backup_path

    def list_backups(self) -> List[Path]:
        """List existing backups, oldest first."""
        if not self.backup_dir.exists():
            return []
        return sorted(self.backup_dir.glob(f"{self.save_path.stem}_*{self.save_path.suffix}"))
