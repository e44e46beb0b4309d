"""The whole set of users, with id reuse and file persistence."""

from __future__ import annotations

import os
from typing import IO

from taskboard.project import NotFoundError, Project
from taskboard.task import INDENT
from taskboard.user import User

USER_RULE_WIDE = "=" * 44
USER_RULE_THIN = "-" * 44
DEFAULT_DATABASE = "database.txt"


class DuplicateUserError(ValueError):
    """Raised when a user name is already taken."""


class Workspace:
    """All registered users and the ids they are filed under."""

    def __init__(self) -> None:
        self.users: dict[int, User] = {}
        self._free_ids: set[int] = set()
        self._counter = 1

    def create_user(self, name: str) -> User:
        """Register a new user under the smallest free id."""
        if any(user.name == name for user in self.users.values()):
            raise DuplicateUserError(f"user name {name!r} already exists")
        if self._free_ids:
            user_id = min(self._free_ids)
            self._free_ids.remove(user_id)
        else:
            user_id = self._counter
            self._counter += 1
        user = User(user_id, name)
        self.users[user_id] = user
        return user

    def delete_user(self, user_id: int) -> User:
        """Remove a user with all their data and keep the id for reuse."""
        try:
            user = self.users.pop(user_id)
        except KeyError:
            raise NotFoundError(f"user {user_id} not found") from None
        self._free_ids.add(user_id)
        return user

    def get_user(self, user_id: int) -> User:
        """Return the user with the given id."""
        try:
            return self.users[user_id]
        except KeyError:
            raise NotFoundError(f"user {user_id} not found") from None

    def get_project(self, user_id: int, project_id: int) -> Project:
        """Return a project of a user."""
        return self.get_user(user_id).get_project(project_id)

    def _ordered(self) -> list[tuple[int, User]]:
        return sorted(self.users.items())

    def render_users(self) -> str:
        """Return the table of registered users."""
        if not self.users:
            return f"\n{INDENT}[!] No users exist in the system.\n"
        lines = [
            "",
            INDENT + USER_RULE_WIDE,
            INDENT + "             REGISTERED USERS               ",
            INDENT + USER_RULE_WIDE,
            f"{INDENT}{'User ID':<10} | User Name",
            INDENT + USER_RULE_THIN,
            *(f"{INDENT}{user.id:<10} | {user.name}" for _, user in self._ordered()),
            INDENT + USER_RULE_WIDE,
        ]
        return "\n".join(lines) + "\n"

    def dump(self, stream: IO[str]) -> None:
        """Write the user count and every user, with their projects and tasks."""
        stream.write(f"{len(self.users)}\n")
        for _, user in self._ordered():
            user.save(stream)

    def read(self, stream: IO[str]) -> None:
        """Replace the contents with data written by :meth:`dump`.

        Users are renumbered from 1. An empty stream leaves things unchanged.
        """
        first = stream.readline()
        if not first:
            return
        try:
            count = int(first.strip())
        except ValueError as exc:
            raise ValueError(f"malformed user count: {first!r}") from exc
        self.users.clear()
        self._free_ids.clear()
        self._counter = 1
        for _ in range(count):
            user = User.load(stream)
            user.id = self._counter
            self._counter += 1
            self.users[user.id] = user

    def save(self, path: str | os.PathLike[str] = DEFAULT_DATABASE) -> None:
        """Write everything to a file."""
        with open(path, "w", encoding="utf-8") as stream:
            self.dump(stream)

    def load(self, path: str | os.PathLike[str] = DEFAULT_DATABASE) -> bool:
        """Read everything from a file; return False if there is no such file."""
        try:
            stream = open(path, encoding="utf-8")
        except FileNotFoundError:
            return False
        with stream:
            self.read(stream)
        return True