"""Projects: a numbered collection of tasks with id reuse."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import IO

from taskboard.task import FIELD_SEPARATOR, INDENT, Status, Task

WIDE_RULE = "=" * 85
THIN_RULE = "-" * 85


class NotFoundError(LookupError):
    """Raised when a requested item does not exist."""


def _table_head() -> list[str]:
    return [
        f"{INDENT}{'ID':<6} | {'Status':<15} | {'Title':<20} | Description",
        INDENT + THIN_RULE,
    ]


def _table_row(task: Task) -> str:
    return (
        f"{INDENT}{task.id:<6} | {task.status.label:<15} | "
        f"{task.title:<20} | {task.description}"
    )


@dataclass
class Project:
    """A named project holding tasks keyed by id."""

    id: int
    name: str
    tasks: dict[int, Task] = field(default_factory=dict)
    _free_ids: set[int] = field(default_factory=set, init=False, repr=False)
    _counter: int = field(default=1, init=False, repr=False)

    def next_task_id(self) -> int:
        """Claim an id: the smallest freed one, else the next new one."""
        if self._free_ids:
            task_id = min(self._free_ids)
            self._free_ids.remove(task_id)
            return task_id
        task_id = self._counter
        self._counter += 1
        return task_id

    def add_task(self, title: str, description: str, priority: int) -> Task:
        """Add a task with priority 1 (high), 2 (medium) or 3 (low)."""
        if isinstance(priority, bool) or not isinstance(priority, int) or not 1 <= priority <= 3:
            raise ValueError(f"priority must be 1, 2 or 3, got {priority!r}")
        task_id = self.next_task_id()
        task = Task(task_id, title, description, priority)
        self.tasks[task_id] = task
        return task

    def delete_task(self, task_id: int) -> Task:
        """Remove a task and keep its id for reuse."""
        try:
            task = self.tasks.pop(task_id)
        except KeyError:
            raise NotFoundError(f"task {task_id} not found") from None
        self._free_ids.add(task_id)
        return task

    def set_task_status(self, task_id: int, status: Status) -> Task:
        """Change the status of an existing task."""
        try:
            task = self.tasks[task_id]
        except KeyError:
            raise NotFoundError(f"task {task_id} not found") from None
        task.status = status
        return task

    def _ordered(self) -> list[Task]:
        return [self.tasks[key] for key in sorted(self.tasks)]

    def tasks_with_status(self, status: Status) -> list[Task]:
        """Return the tasks in the given status, ordered by id."""
        return [task for task in self._ordered() if task.status is status]

    def render_tasks(self) -> str:
        """Return the table of all tasks."""
        if not self.tasks:
            return f"\n{INDENT}[!] No tasks in this project.\n"
        lines = [
            "",
            INDENT + WIDE_RULE,
            INDENT + "                   PROJECT TASKS LIST",
            INDENT + WIDE_RULE,
            *_table_head(),
            *(_table_row(task) for task in self._ordered()),
            INDENT + WIDE_RULE,
        ]
        return "\n".join(lines) + "\n"

    def render_tasks_by_status(self, status: Status) -> str:
        """Return the table of tasks in one status."""
        if not self.tasks:
            return f"\n{INDENT}[!] No tasks found in this project.\n"
        lines = [
            "",
            INDENT + WIDE_RULE,
            "",
            f"{INDENT}           --- Showing Tasks with Status: [{status.label}] ---",
            "",
            INDENT + WIDE_RULE,
            *_table_head(),
        ]
        matching = self.tasks_with_status(status)
        if not matching:
            lines.append(INDENT + "[!] No tasks currently in this status.")
        else:
            lines.extend(_table_row(task) for task in matching)
            lines.append(INDENT + WIDE_RULE)
        return "\n".join(lines) + "\n"

    def save(self, stream: IO[str]) -> None:
        """Write the project header and its tasks in id order."""
        stream.write(f"{self.id}{FIELD_SEPARATOR}{self.name}{FIELD_SEPARATOR}{len(self.tasks)}\n")
        for task in self._ordered():
            stream.write(task.to_line() + "\n")

    @classmethod
    def load(cls, stream: IO[str]) -> Project:
        """Read a project written by :meth:`save`; tasks are renumbered from 1."""
        header = stream.readline().rstrip("\r\n")
        if not header:
            return cls(0, "")
        fields = header.split(FIELD_SEPARATOR)
        if len(fields) < 3:
            raise ValueError(f"malformed project record: {header!r}")
        id_text, name, count_text = fields[:3]
        try:
            project = cls(int(id_text), name)
            count = int(count_text)
        except ValueError as exc:
            raise ValueError(f"malformed project record: {header!r}") from exc
        for _ in range(count):
            task = Task.from_line(stream.readline())
            task.id = project._counter
            project._counter += 1
            project.tasks[task.id] = task
        return project