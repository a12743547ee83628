"""Task data model for the Taskbot CLI application."""

from dataclasses import dataclass
from typing import Optional, Dict, Any
from enum import Enum


class TaskKind(Enum):
    """Task variants."""
    TODO = "todo"
    DEADLINE = "deadline"
    EVENT = "event"


# Single-letter tag shown in front of every rendered task
KIND_TAGS = {
    TaskKind.TODO: "T",
    TaskKind.DEADLINE: "D",
    TaskKind.EVENT: "E",
}

# Label used for the date/time field of the timed variants
WHEN_LABELS = {
    TaskKind.DEADLINE: "by",
    TaskKind.EVENT: "at",
}


@dataclass
class Task:
    """A todo, deadline or event tracked by the assistant."""

    kind: TaskKind
    description: str
    done: bool = False
    when: Optional[str] = None  # deadline "by" / event "at"

    def __post_init__(self):
        """Post-initialization validation."""
        if isinstance(self.kind, str):
            self.kind = TaskKind(self.kind)

        if not self.description:
            raise ValueError("Task description cannot be empty")

        if self.kind in WHEN_LABELS and not self.when:
            raise ValueError(f"A {self.kind.value} needs a '{WHEN_LABELS[self.kind]}' value")

        for text in (self.description, self.when or ""):
            if "\n" in text or "\r" in text:
                raise ValueError("Task text cannot contain line breaks")

        if self.kind == TaskKind.TODO:
            self.when = None

    @classmethod
    def todo(cls, description: str) -> "Task":
        return cls(TaskKind.TODO, description)

    @classmethod
    def deadline(cls, description: str, by: str) -> "Task":
        return cls(TaskKind.DEADLINE, description, when=by)

    @classmethod
    def event(cls, description: str, at: str) -> "Task":
        return cls(TaskKind.EVENT, description, when=at)

    def mark_as_done(self):
        """Mark the task as done."""
        self.done = True

    @property
    def status_icon(self) -> str:
        return "X" if self.done else " "

    def render(self) -> str:
        """Render the task as a single display line, e.g. ``[D][ ] report (by: Jan 01 2024)``."""
        text = f"[{KIND_TAGS[self.kind]}][{self.status_icon}] {self.description}"
        if self.kind in WHEN_LABELS:
            text += f" ({WHEN_LABELS[self.kind]}: {self.when})"
        return text

    def __str__(self) -> str:
        return self.render()

    def to_dict(self) -> Dict[str, Any]:
        """Convert the Task to a plain dictionary."""
        return {
            "kind": self.kind.value,
            "description": self.description,
            "done": self.done,
            "when": self.when,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        """Create a Task from a dictionary."""
        return cls(
            kind=TaskKind(data.get("kind", "todo")),
            description=data.get("description", ""),
            done=data.get("done", False),
            when=data.get("when"),
        )
