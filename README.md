# tasktracker

A small command-line tool for keeping track of your daily tasks and of the
time you spend working on each one.

Tasks are stored as JSON in a `.tasktracker` folder in your home directory:
`tasks.json` holds every task and `selected.json` remembers the task that was
last started with `switch`. The folder is created the first time you run the
tool.

## Installation

```
pip install .
```

## Usage

The tool installs a single command, `task`. Run `task --help` or
`task <command> --help` for the options of each command.

### Create a task

```
task new "Write report"
task new "Write report" --tag work --tag writing --start
```

`-t` / `--tag` may be given several times. `-s` / `--start` starts the task
right after it is created, exactly as `switch` would. Without it, the new task
is printed as a table.

### Start a task

```
task switch "Write report"
task start "Review pull requests"
```

`start` is an alias of `switch`. The currently selected task (the one last
started with `switch`) is stopped and marked as done first, then the named task
is marked in progress and becomes the selected task. Both the started and the
stopped task are printed. If the named task is the one already selected, it is
stopped and the tool reports that it is already started.

### Stop a task

```
task stop "Review pull requests"
```

The task is marked `done` and the time since it was last started is added to
its duration. You can start it again later.

### List tasks

```
task ls
task ls --date 05/03/2025 --status done
task ls --all
```

By default the list holds the tasks started on the given day (today unless
`-d` / `--date` is given) together with every task whose status is one of the
given statuses. `-s` / `--status` may be given several times; when it is not
given, the statuses are `todo` and `inprogress`. `-a` / `--all` lists every
task with no filter.

The table shows each task's name, status, duration (for example `1h2m3.5s`),
creation, start and finish times, and its tags joined with `|`.

### Dates

A task is identified by its name (case and surrounding spaces ignored)
together with the day it was created. To refer to a task created on an earlier
day, pass `-d` / `--date` to `switch`, `stop` or `ls` in one of these forms:

- `DD/MM/YYYY`, for example `05/03/2025`
- `DD/MM/YY`, for example `05/03/25`
- `DD-MM-YYYY`, for example `05-03-2025`
- `DD-MM-YY`, for example `05-03-25`

Two-digit years from `69` to `99` mean 1969–1999; the others mean 2000–2068.

Task statuses are `todo`, `inprogress`, `done` and `wontdo`.

When a command fails, for example because the task does not exist or a task
with the same name was already created that day, the message is printed to
standard error and the command exits with status 1.

## Using it from Python

```python
from tasktracker.models import new_task
from tasktracker.repository import FsTaskRepository
from tasktracker.services import FindTasksFilter, TaskService
from tasktracker.table import render_table

service = TaskService(FsTaskRepository("/tmp/tasks"))
task = new_task("Write report")
service.save(task)
service.start(task.name, task.created_at)
service.stop(task.name, task.created_at)
print(render_table(service.find(FindTasksFilter(status=["done"]))))
```

`tasktracker.cli.run(service, argv)` runs one command against any
`TaskService` and returns the exit status.

## Limitations

- There is no command to delete a task or to set its status to `wontdo`;
  `TaskService.delete` exists only for use from Python.
- Tasks cannot be filtered by tag: `FindTasksFilter.tags` is accepted but not
  used.

## Running the tests

```
pip install .[test]
pytest
```