"""Tasks, their status and their one-line storage form."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

INDENT = " " * 54
FIELD_SEPARATOR = "|"
CARD_RULE = "-" * 50


class Status(Enum):
    """Where a task stands; the value is what the data file stores."""

    TODO = 0
    IN_PROGRESS = 1
    DONE = 2

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]

    @classmethod
    def from_choice(cls, choice: int) -> Status:
        """Map a menu choice (1, 2 or 3) to a status."""
        if isinstance(choice, bool) or not isinstance(choice, int) or not 1 <= choice <= 3:
            raise ValueError(f"status choice must be 1, 2 or 3, got {choice!r}")
        return cls(choice - 1)

    def __str__(self) -> str:
        return self.label


_STATUS_LABELS = {
    Status.TODO: "To Do",
    Status.IN_PROGRESS: "In Progress",
    Status.DONE: "Done",
}

_PRIORITY_NAMES = {1: "High", 2: "Medium"}


@dataclass
class Task:
    """A unit of work inside a project."""

    id: int
    title: str
    description: str
    priority: int
    status: Status = Status.TODO

    @property
    def priority_name(self) -> str:
        return _PRIORITY_NAMES.get(self.priority, "Low")

    def to_line(self) -> str:
        """Return the pipe-separated record for this task, without a newline."""
        return FIELD_SEPARATOR.join(
            (
                str(self.id),
                self.title,
                self.description,
                str(self.status.value),
                str(self.priority),
            )
        )

    @classmethod
    def from_line(cls, line: str) -> Task:
        """Build a task from a record written by :meth:`to_line`."""
        fields = line.rstrip("\r\n").split(FIELD_SEPARATOR)
        if len(fields) < 5:
            raise ValueError(f"malformed task record: {line!r}")
        id_text, title, description, status_text, priority_text = fields[:5]
        try:
            return cls(
                id=int(id_text),
                title=title,
                description=description,
                priority=int(priority_text),
                status=Status(int(status_text)),
            )
        except ValueError as exc:
            raise ValueError(f"malformed task record: {line!r}") from exc

    def render_card(self) -> str:
        """Return the boxed card view of this task."""
        rows = (
            ("TASK ID", str(self.id)),
            ("Title  ", self.title),
            ("Status ", self.status.label),
            ("Prio   ", self.priority_name),
            ("Desc   ", self.description),
        )
        lines = ["", INDENT + CARD_RULE]
        lines.extend(f"{INDENT}| {key}: {value:<38} |" for key, value in rows)
        lines.append(INDENT + CARD_RULE)
        return "\n".join(lines) + "\n"