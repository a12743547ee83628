"""Command parser for Taskbot CLI.

Turns one line of user input into a change to the task list, saves the list
when it changed, and reports the outcome through the UI.
"""

import logging
import re
from typing import Callable, Dict, List, Optional, Tuple

from fuzzywuzzy import process

from .config import ConfigModel
from .domain import Task, TaskKind, TaskList
from .exceptions import InputError
from .storage import Storage, WHEN_SEPARATORS
from .ui import Ui, render_numbered, render_task_list
from .utils.datetime import normalize_date

logger = logging.getLogger(__name__)

FAREWELL = "Bye. Hope to see you again soon!"
UNKNOWN_COMMAND = "I'm sorry, but I don't know what that means. ☹"

LINE_BREAK_RE = re.compile(r"\s*[\r\n]+\s*")

# Keywords tried in order when routing by containment
CONTAINMENT_ORDER = ("delete", "done", "get", "find", "todo", "event", "deadline")

# Article used in the empty description message
KIND_ARTICLES = {
    TaskKind.TODO: "a todo",
    TaskKind.EVENT: "an event",
    TaskKind.DEADLINE: "a deadline",
}


def split_command(line: str) -> Tuple[str, str]:
    """Split input into (keyword, argument) on the first run of whitespace."""
    parts = line.strip().split(maxsplit=1)
    if not parts:
        return "", ""
    keyword = parts[0]
    argument = parts[1].strip() if len(parts) > 1 else ""
    return keyword, argument


def tasks_footer(count: int) -> str:
    """Footer stating how many tasks are in the list."""
    noun = "task" if count == 1 else "tasks"
    return f"Now you have {count} {noun} in the list."


class CommandParser:
    """Dispatches user commands against a task list.

    The task list, storage and UI are handed in by the caller; the parser
    never creates them itself.
    """

    def __init__(self, tasks: TaskList, storage: Storage, ui: Ui, config: Optional[ConfigModel] = None):
        self.tasks = tasks
        self.storage = storage
        self.ui = ui
        self.config = config or ConfigModel()
        self.is_exit = False

        self.handlers: Dict[str, Callable[[str], str]] = {
            "bye": self._say_goodbye,
            "list": self._list_tasks,
            "delete": self._delete_task,
            "done": self._mark_task_as_done,
            "get": self._get_tasks_from_date,
            "find": self._find_tasks,
            "todo": lambda arg: self._create_task(TaskKind.TODO, arg),
            "event": lambda arg: self._create_task(TaskKind.EVENT, arg),
            "deadline": lambda arg: self._create_task(TaskKind.DEADLINE, arg),
        }

    def process_input(self, line: str) -> str:
        """Process one line of input.

        Returns:
            The confirmation message, which has also been shown on the UI.

        Raises:
            InputError: If the command is unknown or its argument is invalid.
                Nothing is changed or saved in that case.
        """
        keyword, argument = split_command(line)
        handler_name = self._route(line.strip(), keyword)
        if handler_name is None:
            logger.debug("Unrecognized command: %r", line)
            raise InputError(UNKNOWN_COMMAND, suggestions=self._suggest(keyword))

        logger.debug("Dispatching %r to %s", line, handler_name)
        message = self.handlers[handler_name](argument)
        self.ui.show_message(message)
        return message

    def _route(self, line: str, keyword: str) -> Optional[str]:
        if self.config.containment_dispatch:
            if line in ("bye", "list"):
                return line
            for name in CONTAINMENT_ORDER:
                if name in line:
                    return name
            return None

        if keyword in ("bye", "list"):
            return keyword if line == keyword else None
        return keyword if keyword in self.handlers else None

    def _suggest(self, keyword: str) -> List[str]:
        if not keyword:
            return []
        matches = process.extract(keyword, list(self.handlers), limit=3)
        return [name for name, score in matches if score >= 70]

    def _save(self):
        if not self.storage.save(self.tasks):
            logger.warning("Task list changed but could not be saved to %s", self.storage.save_path)

    def _parse_index(self, argument: str, missing_message: str, invalid_message: str) -> int:
        """Parse a 1-based task number into a valid zero-based index."""
        if not argument:
            raise InputError(missing_message)
        try:
            index = int(argument) - 1
        except ValueError:
            raise InputError(invalid_message)
        if not 0 <= index < len(self.tasks):
            raise InputError(missing_message)
        return index

    # ------------------------------------------------------------------ commands

    def _say_goodbye(self, argument: str) -> str:
        self.is_exit = True
        return FAREWELL

    def _list_tasks(self, argument: str) -> str:
        return render_task_list(self.tasks)

    def _delete_task(self, argument: str) -> str:
        index = self._parse_index(
            argument,
            "Which task do you want to delete?",
            "Enter the index of the task to be deleted.",
        )
        task = self.tasks.delete(index)
        self._save()
        return f"Noted. I've removed this task:\n{task}\n{tasks_footer(len(self.tasks))}"

    def _mark_task_as_done(self, argument: str) -> str:
        index = self._parse_index(
            argument,
            "Which task have you done?",
            "Enter the index of the task done.",
        )
        task = self.tasks.get(index)
        task.mark_as_done()
        self._save()
        return f"Nice! I've marked this as done:\n{task}"

    def _get_tasks_from_date(self, argument: str) -> str:
        if not argument:
            raise InputError("Enter the date you want to get tasks from.")

        required_date = self._normalize_date(argument)
        matches = self.tasks.matching_rendered(required_date)
        if not matches:
            return f"You have no tasks from {required_date}."
        return f"Here are the task(s) from {required_date}:\n{render_numbered(matches)}"

    def _find_tasks(self, argument: str) -> str:
        if not argument:
            raise InputError("Enter a search term.")

        matches = [task for _, task in self.tasks.find(argument)]
        if not matches:
            return f'You have no matching tasks for the keyword: "{argument}".'
        return f"Here are the matching task(s) in your list:\n{render_numbered(matches)}"

    def _create_task(self, kind: TaskKind, argument: str) -> str:
        empty_message = f"The description of {KIND_ARTICLES[kind]} cannot be empty."
        if not argument:
            raise InputError(empty_message)

        # One task per save-file line
        argument = LINE_BREAK_RE.sub(" ", argument)

        if kind == TaskKind.TODO:
            task = Task.todo(argument)
        else:
            separator = WHEN_SEPARATORS[kind]
            # Leading space lets "event /at x" split into an empty description
            description, found, when = f" {argument}".partition(separator)
            description, when = description.strip(), when.strip()
            if not found or not when:
                raise InputError(
                    f'Enter the date and time of the {kind.value} after "{separator.strip()}".'
                )
            if not description:
                raise InputError(empty_message)
            task = Task(kind, description, when=self._normalize_date(when))

        self.tasks.add(task)
        self._save()
        return f"Got it. I've added this task:\n{task}\n{tasks_footer(len(self.tasks))}"

    def _normalize_date(self, text: str) -> str:
        return normalize_date(
            text,
            date_format=self.config.date_format,
            time_format=self.config.time_format,
            natural=self.config.natural_dates,
        )
