"""Users: owners of a numbered collection of projects."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import IO

from taskboard.project import NotFoundError, Project
from taskboard.task import FIELD_SEPARATOR, INDENT

PROJECT_RULE_WIDE = "=" * 50
PROJECT_RULE_THIN = "-" * 50


@dataclass
class User:
    """A named user holding projects keyed by id."""

    id: int
    name: str
    projects: dict[int, Project] = field(default_factory=dict)
    _free_ids: set[int] = field(default_factory=set, init=False, repr=False)
    _counter: int = field(default=1, init=False, repr=False)

    def next_project_id(self) -> int:
        """Claim an id: the smallest freed one, else the next new one."""
        if self._free_ids:
            project_id = min(self._free_ids)
            self._free_ids.remove(project_id)
            return project_id
        project_id = self._counter
        self._counter += 1
        return project_id

    def create_project(self, name: str) -> Project:
        """Create an empty project and return it."""
        project_id = self.next_project_id()
        project = Project(project_id, name)
        self.projects[project_id] = project
        return project

    def get_project(self, project_id: int) -> Project:
        """Return the project with the given id."""
        try:
            return self.projects[project_id]
        except KeyError:
            raise NotFoundError(f"project {project_id} not found") from None

    def delete_project(self, project_id: int) -> Project:
        """Remove a project with all its tasks and keep its id for reuse."""
        try:
            project = self.projects.pop(project_id)
        except KeyError:
            raise NotFoundError(f"project {project_id} not found") from None
        self._free_ids.add(project_id)
        return project

    def _ordered(self) -> list[tuple[int, Project]]:
        return sorted(self.projects.items())

    def render_projects(self) -> str:
        """Return the table of this user's projects."""
        if not self.projects:
            return f"\n{INDENT}[!] No projects found for this user.\n"
        lines = [
            "",
            f"{INDENT}          --- Projects for User: {self.name} ---",
            "",
            INDENT + PROJECT_RULE_WIDE,
            INDENT + "                USER PROJECTS                     ",
            INDENT + PROJECT_RULE_WIDE,
            f"{INDENT}{'Project ID':<12} | Project Name",
            INDENT + PROJECT_RULE_THIN,
            *(f"{INDENT}{key:<12} | {project.name}" for key, project in self._ordered()),
            INDENT + PROJECT_RULE_WIDE,
        ]
        return "\n".join(lines) + "\n"

    def save(self, stream: IO[str]) -> None:
        """Write the user header and all projects in id order."""
        stream.write(
            f"{self.id}{FIELD_SEPARATOR}{self.name}{FIELD_SEPARATOR}{len(self.projects)}\n"
        )
        for _, project in self._ordered():
            project.save(stream)

    @classmethod
    def load(cls, stream: IO[str]) -> User:
        """Read a user written by :meth:`save`; projects are renumbered from 1."""
        header = stream.readline().rstrip("\r\n")
        if not header:
            return cls(0, "")
        fields = header.split(FIELD_SEPARATOR)
        if len(fields) < 3:
            raise ValueError(f"malformed user record: {header!r}")
        id_text, name, count_text = fields[:3]
        try:
            user = cls(int(id_text), name)
            count = int(count_text)
        except ValueError as exc:
            raise ValueError(f"malformed user record: {header!r}") from exc
        for _ in range(count):
            project = Project.load(stream)
            project.id = user._counter
            user._counter += 1
            user.projects[project.id] = project
        return user