"""Taskbot CLI - a personal task tracking assistant for the terminal."""

__version__ = "0.1.0"

from .domain import (
    Task,
    TaskKind,
    TaskList,
)
from .exceptions import InputError

__all__ = ["Task", "TaskKind", "TaskList", "InputError", "__version__"]
