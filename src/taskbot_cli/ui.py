"""Console output for Taskbot CLI."""

from typing import Iterable, Optional

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from .domain import Task, TaskList
from .exceptions import InputError

GREETING = "Hello! I'm Taskbot\nWhat can I do for you?"


def render_numbered(tasks: Iterable[Task]) -> str:
    """Render tasks as ``1. [T][ ] ...`` lines."""
    return "\n".join(f"{number}. {task.render()}" for number, task in enumerate(tasks, start=1))


def render_task_list(tasks: TaskList) -> str:
    """Render the full task list for the ``list`` command."""
    if len(tasks) == 0:
        return "You have no tasks in your list."
    return "Here are the tasks in your list:\n" + render_numbered(tasks)


class Ui:
    """Prints messages, errors and task listings to the terminal.

    Task text is printed with markup disabled so ``[T]`` style tags are shown
    literally instead of being read as rich markup.
    """

    def __init__(self, console: Optional[Console] = None, no_color: bool = False):
        self.console = console or Console(no_color=no_color, highlight=False)

    def show_welcome(self):
        self.console.print(Panel(Text(GREETING), border_style="cyan", expand=False))

    def show_message(self, message: str):
        self.console.print(Text(message))

    def show_error(self, error: InputError):
        """Show an input error with any suggestions."""
        self.console.print(Text(error.message, style="bold red"))
        if error.suggestions:
            self.console.print(Text(f"Did you mean: {', '.join(error.suggestions)}?", style="yellow"))
