"""Domain models for Taskbot CLI."""

from .task import Task, TaskKind
from .task_list import TaskList

__all__ = [
    "Task",
    "TaskKind",
    "TaskList",
]
