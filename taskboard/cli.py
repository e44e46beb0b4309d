"""Interactive menu-driven console for managing users, projects and tasks."""

from __future__ import annotations

import argparse
import sys
from typing import IO

from taskboard.project import NotFoundError, Project
from taskboard.task import INDENT, Status
from taskboard.user import User
from taskboard.workspace import DEFAULT_DATABASE, DuplicateUserError, Workspace

MENU_RULE = "=" * 44
MENU_THIN_RULE = " " + "-" * 44
STATUS_RULE = "-" * 38

_MENU = "\n".join(
    [
        "",
        INDENT + MENU_RULE,
        INDENT + "        TASK MANAGEMENT SYSTEM v1.0         ",
        INDENT + MENU_RULE,
        "",
        INDENT + " [ USER MANAGEMENT ]",
        INDENT + "  1. Create New User",
        INDENT + "  2. View All Users",
        INDENT + "  3. Delete User",
        "",
        INDENT + " [ PROJECT MANAGEMENT ]",
        INDENT + "  4. Create New Project",
        INDENT + "  5. View User Projects",
        INDENT + "  6. Delete Project",
        "",
        INDENT + " [ TASK MANAGEMENT ]",
        INDENT + "  7. Add Task to Project",
        INDENT + "  8. Update Task Status",
        INDENT + "  9. View All Tasks",
        INDENT + "  10. Filter Tasks By Status",
        INDENT + "  11. Delete Task",
        "",
        INDENT + MENU_THIN_RULE,
        INDENT + "  0. Exit & Save Changes",
        INDENT + MENU_THIN_RULE,
        "",
    ]
)

_STATUS_OPTIONS = "\n".join(
    [
        INDENT + "  1. To Do",
        INDENT + "  2. In Progress",
        INDENT + "  3. Done",
    ]
)

_YES_NO_ERROR = "Error: Please enter a valid number (1, 2)!"
_ONE_TO_THREE_ERROR = "Error: Please enter a valid number (1, 2, or 3)!"
_NUMBER_ERROR = "Error: Please enter a valid number !"


class Console:
    """Reads menu choices from a text stream and drives a workspace."""

    def __init__(
        self,
        workspace: Workspace | None = None,
        stdin: IO[str] | None = None,
        stdout: IO[str] | None = None,
        database: str = DEFAULT_DATABASE,
    ) -> None:
        self.workspace = workspace if workspace is not None else Workspace()
        self._in = stdin if stdin is not None else sys.stdin
        self._out = stdout if stdout is not None else sys.stdout
        self.database = database

    # -- low-level input and output -------------------------------------

    def _write(self, text: str) -> None:
        self._out.write(text)
        self._out.flush()

    def _say(self, text: str) -> None:
        self._write(f"{INDENT}{text}\n")

    def _clear(self) -> None:
        isatty = getattr(self._out, "isatty", None)
        if isatty is not None and isatty():
            self._write("\033[2J\033[H")

    def _read_line(self) -> str:
        line = self._in.readline()
        if not line:
            raise EOFError("input exhausted")
        return line.rstrip("\r\n")

    def _ask(self, prompt: str) -> str:
        self._write(prompt)
        return self._read_line()

    def _ask_text(self, prompt: str) -> str:
        """Read the next non-blank line, without its leading whitespace."""
        self._write(prompt)
        while True:
            text = self._read_line().lstrip()
            if text:
                return text

    def _ask_int(self, prompt: str) -> int | None:
        try:
            return int(self._ask(prompt).strip())
        except ValueError:
            return None

    def _pause(self, message: str) -> None:
        self._write(INDENT + message)
        self._read_line()

    def _choose(self, prompt: str, high: int, error: str, leading: str = "\n") -> int:
        """Ask until a number from 1 to ``high`` is entered."""
        while True:
            choice = self._ask_int(prompt)
            if choice is not None and 1 <= choice <= high:
                return choice
            self._write(f"{leading}{INDENT}{error}\n")
            self._pause("Press Enter to try again...")
            self._clear()

    def _ask_user_id_until_valid(self, prompt: str) -> int:
        while True:
            user_id = self._ask_int(prompt)
            if user_id is not None:
                return user_id
            self._write(f"\n{INDENT}{_NUMBER_ERROR}\n")
            self._pause("Press Enter to try again...")
            self._clear()

    def _find_user(self, user_id: int | None) -> User | None:
        if user_id is None:
            return None
        try:
            return self.workspace.get_user(user_id)
        except NotFoundError:
            return None

    @staticmethod
    def _find_project(user: User, project_id: int | None) -> Project | None:
        if project_id is None:
            return None
        try:
            return user.get_project(project_id)
        except NotFoundError:
            return None

    # -- main loop -------------------------------------------------------

    def run(self) -> None:
        """Show the menu until the user exits; saving happens on exit."""
        actions = {
            1: self.create_user,
            2: self.view_users,
            3: self.delete_user,
            4: self.create_project,
            5: self.view_user_projects,
            6: self.delete_project,
            7: self.add_task,
            8: self.update_task_status,
            9: self.view_tasks,
            10: self.view_filtered_tasks,
            11: self.delete_task,
        }
        try:
            while True:
                self._clear()
                self._write(_MENU)
                choice = self._ask_int(f"{INDENT} Enter choice: ")
                if choice is None:
                    self._say("Error: Please enter a valid number!")
                    self._pause("Press Enter to continue...")
                    continue
                if choice == 0:
                    self.workspace.save(self.database)
                    return
                action = actions.get(choice)
                if action is None:
                    self._say("Invalid choice!")
                else:
                    action()
                self._write("\n")
                self._pause("Press Enter to continue...")
                self._clear()
        except EOFError:
            return

    # -- users -----------------------------------------------------------

    def create_user(self) -> User | None:
        """Register a user and optionally start a project for them."""
        self._clear()
        name = self._ask_text("\n" * 5 + INDENT + "Enter user name: ")
        try:
            user = self.workspace.create_user(name)
        except DuplicateUserError:
            self._say(f"Error: User name '{name}' already exists!")
            return None
        self._say(f"User created successfully! | User ID: {user.id}")
        prompt = (
            "\n\n\n"
            + INDENT
            + "Do you want to add a project for this user?\n"
            + INDENT
            + " 1. Yes  2. No : "
        )
        if self._choose(prompt, 2, _YES_NO_ERROR) == 1:
            self.create_project(user.id)
        return user

    def view_users(self) -> None:
        """Print the table of users."""
        self._clear()
        self._write(self.workspace.render_users())

    def delete_user(self) -> None:
        """Delete a user chosen by id."""
        self._clear()
        self._write("\n" * 4)
        user_id = self._ask_user_id_until_valid(INDENT + "Enter User ID to delete: ")
        try:
            self.workspace.delete_user(user_id)
        except NotFoundError:
            self._say("---User not found!---")
        else:
            self._write(f"\n{INDENT}---User and all their data deleted successfully.---\n")

    # -- projects --------------------------------------------------------

    def create_project(self, user_id: int | None = None) -> Project | None:
        """Create a project, asking for the user when none is given."""
        self._clear()
        if user_id is None:
            user_id = self._ask_int("\n" * 5 + INDENT + "Enter user ID: ")
            if user_id is None:
                self._say("Invalid ID format!")
                return None
        else:
            self._write("\n" * 4)
        user = self._find_user(user_id)
        if user is None:
            self._say("User not found!")
            return None
        name = self._ask_text("\n" + INDENT + "Enter project name: ")
        project = user.create_project(name)
        self._say(f"Project '{name}' added successfully! | Project ID: {project.id}")
        first = True
        while True:
            question = (
                "Do you want to add tasks to this project?"
                if first
                else "Do you want to add another task?"
            )
            prompt = f"\n{INDENT}{question}\n{INDENT}1. Yes  2. No : "
            if self._choose(prompt, 2, _YES_NO_ERROR, leading="\n\n") != 1:
                return project
            self.add_task(user_id, project.id)
            first = False

    def view_user_projects(self) -> None:
        """Print the projects of a user."""
        self._clear()
        user = self._find_user(
            self._ask_int("\n" * 4 + INDENT + "Enter User ID to view their projects: ")
        )
        if user is None:
            self._say("User not found!")
            return
        self._write(user.render_projects())

    def delete_project(self) -> None:
        """Delete a project of a user."""
        self._clear()
        self._write("\n" * 4)
        user = self._find_user(self._ask_user_id_until_valid(INDENT + "Enter User ID: "))
        if user is None:
            self._say("User not found!")
            return
        project_id = self._ask_int(INDENT + "Enter Project ID to delete: ")
        try:
            if project_id is None:
                raise NotFoundError("no project id")
            user.delete_project(project_id)
        except NotFoundError:
            self._say("Error: Project ID not found.")
        else:
            self._say(f"Project ID [{project_id}] and all its tasks deleted successfully.")

    # -- tasks -----------------------------------------------------------

    def add_task(self, user_id: int | None = None, project_id: int | None = None) -> None:
        """Add a task, asking for user and project when they are not given."""
        self._clear()
        if user_id is None:
            user_id = self._ask_int("\n" * 4 + INDENT + "User ID: ")
            if user_id is None:
                self._say("Invalid ID format!")
                return
        user = self._find_user(user_id)
        if user is None:
            self._say("User not found!")
            return
        if project_id is None:
            project_id = self._ask_int(INDENT + "Project ID: ")
            if project_id is None:
                self._say("Invalid ID format!")
                return
        else:
            self._write("\n" * 5)
        project = self._find_project(user, project_id)
        if project is None:
            self._say("Project not found!")
            return
        title = self._ask_text(INDENT + "Task title: ")
        description = self._ask(INDENT + "Description: ")
        priority = self._choose(
            "\n" + INDENT + "Enter Priority (1: High, 2: Medium, 3: Low): ",
            3,
            _ONE_TO_THREE_ERROR,
        )
        task = project.add_task(title, description, priority)
        self._say(f"Task added successfully with ID: {task.id}")

    def _ask_project(self) -> Project | None:
        """Ask for a user and one of their projects, reporting what is missing."""
        user = self._find_user(self._ask_int("\n" * 4 + INDENT + "User ID: "))
        if user is None:
            self._say("User not found!")
            return None
        project = self._find_project(user, self._ask_int(INDENT + "Project ID: "))
        if project is None:
            self._say("Project not found!")
        return project

    def _choose_status(self) -> Status:
        while True:
            self._say(STATUS_RULE)
            self._write(f"\n{INDENT}Select New Status for this Task:\n{_STATUS_OPTIONS}\n")
            choice = self._ask_int(INDENT + "  Choice: ")
            if choice is not None and 1 <= choice <= 3:
                return Status.from_choice(choice)
            self._write(f"\n{INDENT}{_ONE_TO_THREE_ERROR}\n")
            self._pause("Press Enter to try again...")
            self._clear()

    def update_task_status(self) -> None:
        """Pick a task and set its status from a menu."""
        self._clear()
        project = self._ask_project()
        if project is None:
            return
        task_id = self._ask_int(INDENT + "Task ID: ")
        if task_id is None or task_id not in project.tasks:
            self._say("Task not found.")
            return
        project.set_task_status(task_id, self._choose_status())
        self._say("Status updated successfully.")

    def view_tasks(self) -> None:
        """Print all tasks of a project."""
        self._clear()
        project = self._ask_project()
        if project is not None:
            self._write(project.render_tasks())

    def view_filtered_tasks(self) -> None:
        """Print the tasks of a project that are in a chosen status."""
        self._clear()
        project = self._ask_project()
        if project is None:
            return
        if not project.tasks:
            self._write(project.render_tasks_by_status(Status.TODO))
            return
        self._write(f"\n{INDENT}Filter by status:\n{_STATUS_OPTIONS}\n")
        while True:
            choice = self._ask_int(INDENT + "  Choice: ")
            if choice is not None and 1 <= choice <= 3:
                break
            self._write(f"\n{INDENT}{_ONE_TO_THREE_ERROR}\n")
            self._pause("Press Enter to try again...")
        self._write(project.render_tasks_by_status(Status.from_choice(choice)))

    def delete_task(self) -> None:
        """Delete a task of a project."""
        self._clear()
        self._write("\n" * 4)
        user = self._find_user(self._ask_user_id_until_valid(INDENT + "User ID: "))
        if user is None:
            self._say("User not found!")
            return
        project = self._find_project(user, self._ask_int(INDENT + "Project ID: "))
        if project is None:
            self._say("Project not found!")
            return
        task_id = self._ask_int(INDENT + "Task ID to delete: ")
        try:
            if task_id is None:
                raise NotFoundError("no task id")
            project.delete_task(task_id)
        except NotFoundError:
            self._say("Error: Task ID not found.")
        else:
            self._say(f"Task ID [{task_id}] deleted successfully.")


def main(argv: list[str] | None = None) -> int:
    """Load the database, run the menu and save on exit."""
    parser = argparse.ArgumentParser(prog="taskboard", description="Manage users, projects and tasks.")
    parser.add_argument(
        "--database",
        default=DEFAULT_DATABASE,
        help=f"data file to load and save (default: {DEFAULT_DATABASE})",
    )
    args = parser.parse_args(argv)
    workspace = Workspace()
    workspace.load(args.database)
    Console(workspace, database=args.database).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())