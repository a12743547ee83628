"""Ordered, in-memory list of tasks."""

from typing import Iterable, Iterator, List, Optional, Tuple

from .task import Task


class TaskList:
    """Ordered collection of tasks.

    Insertion order is display order and persisted order. A task's position is
    its only identity: deleting a task shifts every later task down by one.
    """

    def __init__(self, tasks: Optional[Iterable[Task]] = None):
        self._tasks: List[Task] = list(tasks or [])

    def add(self, task: Task) -> None:
        self._tasks.append(task)

    def get(self, index: int) -> Task:
        """Return the task at a zero-based index.

        Raises:
            IndexError: If the index is outside the list. Negative indices are
                rejected rather than counted from the end.
        """
        self._check_index(index)
        return self._tasks[index]

    def delete(self, index: int) -> Task:
        """Remove and return the task at a zero-based index."""
        self._check_index(index)
        return self._tasks.pop(index)

    @property
    def count(self) -> int:
        return len(self._tasks)

    def find(self, term: str) -> List[Tuple[int, Task]]:
        """Tasks whose description contains ``term`` (case-sensitive)."""
        return [(i, task) for i, task in enumerate(self._tasks) if term in task.description]

    def matching_rendered(self, text: str) -> List[Task]:
        """Tasks whose rendered line contains ``text``."""
        return [task for task in self._tasks if text in task.render()]

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._tasks):
            raise IndexError(f"Task index {index} out of range (0..{len(self._tasks) - 1})")

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def __repr__(self) -> str:
        return f"TaskList({self._tasks!r})"
