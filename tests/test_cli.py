import io

import pytest

from taskboard.cli import Console, main
from taskboard.task import Status
from taskboard.workspace import Workspace


def make_console(text, workspace=None, database="unused.txt"):
    out = io.StringIO()
    console = Console(workspace or Workspace(), io.StringIO(text), out, database=database)
    return console, out


def populated():
    workspace = Workspace()
    user = workspace.create_user("alice")
    project = user.create_project("work")
    project.add_task("Write", "draft text", 1)
    project.add_task("Review", "check text", 2)
    return workspace


def test_create_user_without_project():
    console, out = make_console("alice\n2\n")
    user = console.create_user()
    assert user.name == "alice"
    assert console.workspace.get_user(1).name == "alice"
    assert "User created successfully! | User ID: 1" in out.getvalue()
    assert console.workspace.users[1].projects == {}


def test_create_user_rejects_duplicate_name():
    workspace = Workspace()
    workspace.create_user("alice")
    console, out = make_console("alice\n", workspace)
    assert console.create_user() is None
    assert "Error: User name 'alice' already exists!" in out.getvalue()
    assert len(workspace.users) == 1


def test_create_user_with_project_and_task():
    console, out = make_console("bob\n1\nwork\n1\nWrite\nDetails\n2\n2\n")
    console.create_user()
    project = console.workspace.get_project(1, 1)
    assert project.name == "work"
    task = project.tasks[1]
    assert (task.title, task.description, task.priority) == ("Write", "Details", 2)
    assert "Task added successfully with ID: 1" in out.getvalue()


def test_invalid_yes_no_choice_is_asked_again():
    console, out = make_console("carol\n7\n\n2\n")
    console.create_user()
    assert "Error: Please enter a valid number (1, 2)!" in out.getvalue()
    assert console.workspace.get_user(1).name == "carol"


def test_add_task_retries_invalid_priority():
    workspace = Workspace()
    workspace.create_user("alice").create_project("work")
    console, out = make_console("1\n1\nTitle\nDesc\n9\n\n3\n", workspace)
    console.add_task()
    task = workspace.get_project(1, 1).tasks[1]
    assert task.priority == 3
    assert "Error: Please enter a valid number (1, 2, or 3)!" in out.getvalue()


def test_add_task_unknown_user():
    console, out = make_console("5\n")
    console.add_task()
    assert "User not found!" in out.getvalue()


def test_add_task_unknown_project():
    workspace = Workspace()
    workspace.create_user("alice")
    console, out = make_console("1\n4\n", workspace)
    console.add_task()
    assert "Project not found!" in out.getvalue()


def test_create_project_invalid_id_format():
    console, out = make_console("abc\n")
    assert console.create_project() is None
    assert "Invalid ID format!" in out.getvalue()


def test_delete_user_frees_id_for_reuse():
    workspace = Workspace()
    workspace.create_user("alice")
    workspace.create_user("bob")
    console, out = make_console("x\n\n1\n", workspace)
    console.delete_user()
    assert "User and all their data deleted successfully." in out.getvalue()
    assert 1 not in workspace.users
    assert workspace.create_user("carol").id == 1


def test_delete_user_not_found():
    console, out = make_console("3\n")
    console.delete_user()
    assert "---User not found!---" in out.getvalue()


def test_delete_project():
    workspace = populated()
    console, out = make_console("1\n1\n", workspace)
    console.delete_project()
    assert workspace.get_user(1).projects == {}
    assert "Project ID [1] and all its tasks deleted successfully." in out.getvalue()


def test_delete_task_and_missing_task():
    workspace = populated()
    console, out = make_console("1\n1\n2\n", workspace)
    console.delete_task()
    assert sorted(workspace.get_project(1, 1).tasks) == [1]
    console, out = make_console("1\n1\n9\n", workspace)
    console.delete_task()
    assert "Error: Task ID not found." in out.getvalue()


def test_update_task_status():
    workspace = populated()
    console, out = make_console("1\n1\n2\n0\n\n3\n", workspace)
    console.update_task_status()
    assert workspace.get_project(1, 1).tasks[2].status is Status.DONE
    assert "Status updated successfully." in out.getvalue()


def test_update_task_status_missing_task():
    workspace = populated()
    console, out = make_console("1\n1\n8\n", workspace)
    console.update_task_status()
    assert "Task not found." in out.getvalue()
    assert all(t.status is Status.TODO for t in workspace.get_project(1, 1).tasks.values())


def test_view_filtered_tasks_shows_only_matching():
    workspace = populated()
    workspace.get_project(1, 1).set_task_status(2, Status.IN_PROGRESS)
    console, out = make_console("1\n1\n2\n", workspace)
    console.view_filtered_tasks()
    text = out.getvalue()
    assert "Showing Tasks with Status: [In Progress]" in text
    assert "Review" in text
    assert "Write" not in text


def test_view_tasks_and_projects_and_users():
    workspace = populated()
    console, out = make_console("1\n1\n1\n", workspace)
    console.view_tasks()
    console.view_user_projects()
    console.view_users()
    text = out.getvalue()
    assert "PROJECT TASKS LIST" in text
    assert "Projects for User: alice" in text
    assert "REGISTERED USERS" in text


def test_run_invalid_choice_then_exit_saves(tmp_path):
    database = tmp_path / "db.txt"
    console, out = make_console("42\n\n1\nalice\n2\n\n0\n", database=str(database))
    console.run()
    assert "Invalid choice!" in out.getvalue()
    reloaded = Workspace()
    assert reloaded.load(database)
    assert reloaded.get_user(1).name == "alice"


def test_run_stops_on_end_of_input_without_saving(tmp_path):
    database = tmp_path / "db.txt"
    console, _ = make_console("2\n", database=str(database))
    console.run()
    assert not database.exists()


def test_main_round_trip(tmp_path, monkeypatch, capsys):
    database = tmp_path / "db.txt"
    monkeypatch.setattr("sys.stdin", io.StringIO("1\nalice\n1\nwork\n1\nWrite\nDesc\n1\n2\n\n0\n"))
    assert main(["--database", str(database)]) == 0
    monkeypatch.setattr("sys.stdin", io.StringIO("9\n1\n1\n\n0\n"))
    assert main(["--database", str(database)]) == 0
    captured = capsys.readouterr().out
    assert "Write" in captured
    reloaded = Workspace()
    reloaded.load(database)
    task = reloaded.get_project(1, 1).tasks[1]
    assert (task.title, task.priority) == ("Write", 1)


@pytest.mark.parametrize("choice", ["", "abc"])
def test_run_rejects_non_numbers(choice, tmp_path):
    console, out = make_console(f"{choice}\n\n0\n", database=str(tmp_path / "db.txt"))
    console.run()
    assert "Error: Please enter a valid number!" in out.getvalue()