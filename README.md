# taskboard

A menu-driven terminal program for keeping track of users, their projects and
the tasks inside each project, stored in a plain-text file.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Running

```
taskboard
```

By default the data file is `database.txt` in the current directory. Another
file can be given with `--database`:

```
taskboard --database work.txt
```

At start-up the file is read if it exists. If it does not exist, the program
starts with no users.

The program shows a numbered menu:

- **User management**
  - 1: create a user. After that it offers to create a project for the new user.
  - 2: list all users.
  - 3: delete a user, with all their projects and tasks.
- **Project management**
  - 4: create a project for a user. After that it offers to add tasks, one after another.
  - 5: list a user's projects.
  - 6: delete a project, with all its tasks.
- **Task management**
  - 7: add a task to a project.
  - 8: change a task's status.
  - 9: list all tasks in a project.
  - 10: list the tasks in a project that have a chosen status.
  - 11: delete a task.
- **0**: save everything to the data file and exit.

The data file is written only when you choose 0. If input ends, for example
through end-of-file on standard input, the program stops without saving.
When the output is a terminal, the screen is cleared between steps.

User names must be unique. Each task has a title, a description, a priority
(1 High, 2 Medium, 3 Low) and a status: *To Do*, *In Progress* or *Done*.
A new task starts as *To Do*.

User, project and task IDs count up from 1. When you delete an item, its ID
is kept, and the next new item at that level gets the smallest freed ID.

## Storage

Every line of the data file holds one record, and the fields are separated
by `|`:

- the first line holds the number of users;
- a user line is `id|name|number of projects`, and that many project records follow it;
- a project line is `id|name|number of tasks`, and that many task lines follow it;
- a task line is `id|title|description|status|priority`, where status is
  0 (To Do), 1 (In Progress) or 2 (Done).

When the file is read, users, projects and tasks are numbered again from 1 in
the order they appear. Because `|` separates the fields, names, titles and
descriptions should not contain it. A record that cannot be parsed raises
`ValueError`.

## Using it as a library

The model classes can be used without the menu:

```python
from taskboard.workspace import Workspace
from taskboard.task import Status

ws = Workspace()
user = ws.create_user("alice")
project = user.create_project("Website")
task = project.add_task("Write copy", "Landing page text", 2)
project.set_task_status(task.id, Status.DONE)
print(project.render_tasks())
ws.save("database.txt")
```

- `taskboard.workspace.Workspace` holds the users. It has `create_user`,
  `get_user`, `get_project`, `delete_user` and `render_users`. `dump` and
  `read` work on text streams. `save` and `load` work on a file path.
  `load` returns `False` if the file does not exist.
- `taskboard.user.User` has `create_project`, `get_project`,
  `delete_project` and `render_projects`.
- `taskboard.project.Project` has `add_task`, `delete_task`,
  `set_task_status`, `tasks_with_status`, `render_tasks` and
  `render_tasks_by_status`.
- `taskboard.task.Task` has `to_line`, `from_line` and `render_card`.
  `taskboard.task.Status.from_choice` maps a menu choice 1–3 to a status.
- `taskboard.cli.Console` runs the menu on any pair of text streams, and
  `taskboard.cli.main` is the `taskboard` command.

Errors:

- Looking up, changing or deleting an ID that does not exist raises
  `taskboard.project.NotFoundError`, which is a `LookupError`.
- Creating a user whose name is already taken raises
  `taskboard.workspace.DuplicateUserError`, which is a `ValueError`.
- A priority outside 1–3 raises `ValueError`.