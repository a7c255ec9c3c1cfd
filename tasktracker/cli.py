"""Command-line interface for tracking daily tasks."""

from __future__ import annotations

import argparse
import re
import sys
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

from tasktracker.models import Tag, TaskStatus, hash_id, new_task
from tasktracker.repository import FsTaskRepository, TaskNotFoundError
from tasktracker.services import FindTasksFilter, TaskService
from tasktracker.table import print_table

FOLDER_NAME = ".tasktracker"
DEFAULT_STATUSES = [TaskStatus.TODO.value, TaskStatus.IN_PROGRESS.value]
_DATE_RE = re.compile(r"^(\d{2})([/-])(\d{2})\2(\d{4}|\d{2})$")


def _now() -> datetime:
    return datetime.now().astimezone()


def parse_date(value: str) -> datetime:
    """Parse DD/MM/YYYY, DD/MM/YY, DD-MM-YYYY or DD-MM-YY."""
    match = _DATE_RE.match(value.strip())
    if match is None:
        raise argparse.ArgumentTypeError(
            f"invalid date {value!r}: expected DD/MM/YYYY, DD/MM/YY, DD-MM-YYYY or DD-MM-YY"
        )
    day, _, month, year_text = match.groups()
    year = int(year_text)
    if len(year_text) == 2:
        year += 1900 if year >= 69 else 2000
    try:
        return datetime(year, int(month), int(day)).astimezone()
    except (ValueError, OverflowError) as err:
        raise argparse.ArgumentTypeError(f"invalid date {value!r}: {err}") from err


def switch_task(service: TaskService, name: str, date: datetime | None) -> None:
    """Start ``name``, stopping whichever task is currently selected."""
    current = service.get_selected_task()
    current_name = current.name if current else ""
    current_created = current.created_at if current else None

    if current_name:
        service.stop(current_name, current_created)

    if hash_id(name, date) == hash_id(current_name, current_created):
        print(f'The task "{name}" is already started.')
        return

    service.start(name, date)
    task = service.get(name, date)
    service.select_task(task)

    print("Task started:")
    print_table([task])

    try:
        old_task = service.get(current_name, current_created)
    except TaskNotFoundError:
        return

    print("Task stopped:")
    print_table([old_task])


def _cmd_new(service: TaskService, args: argparse.Namespace) -> None:
    task = new_task(args.name)
    task.tags = [Tag(name=tag) for tag in args.tags or []]
    service.save(task)

    if args.start:
        service.start(task.name, task.created_at)
        switch_task(service, task.name, task.created_at)
        return

    print_table([service.get(task.name, task.created_at)])


def _cmd_ls(service: TaskService, args: argparse.Namespace) -> None:
    if args.all:
        print_table(service.list())
        return
    flt = FindTasksFilter(
        day=args.date or _now(),
        status=args.status if args.status is not None else list(DEFAULT_STATUSES),
    )
    print_table(service.find(flt))


def _cmd_switch(service: TaskService, args: argparse.Namespace) -> None:
    switch_task(service, args.name, args.date or _now())


def _cmd_stop(service: TaskService, args: argparse.Namespace) -> None:
    date = args.date or _now()
    service.stop(args.name, date)
    task = service.get(args.name, date)
    print("Task stopped:")
    print_table([task])


def _add_date_option(parser: argparse.ArgumentParser, help_text: str) -> None:
    parser.add_argument("-d", "--date", type=parse_date, default=None, help=help_text)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="task",
        description=(
            "Task is a CLI tool that helps you to keep track of the daily tasks "
            "and the time you spend working on the task."
        ),
        epilog="Example: task --help",
    )
    sub = parser.add_subparsers(dest="command", metavar="command")

    new = sub.add_parser("new", help="Creates a new task with the given name.")
    new.add_argument("name")
    new.add_argument("-s", "--start", action="store_true", help="Starts the task after creation.")
    new.add_argument(
        "-t", "--tag", dest="tags", action="append", default=None, help="Add a tag to the task."
    )
    new.set_defaults(handler=_cmd_new)

    ls = sub.add_parser(
        "ls",
        help="List the tasks started in specific day and those in status 'InProgress', 'ToDo'.",
    )
    ls.add_argument(
        "-a", "--all", action="store_true", help="List all tasks without any filter applied."
    )
    _add_date_option(ls, "The date to filter the tasks by the StartedAt field.")
    ls.add_argument(
        "-s",
        "--status",
        action="append",
        default=None,
        help="The status to filter the tasks by (default: todo, inprogress).",
    )
    ls.set_defaults(handler=_cmd_ls)

    switch = sub.add_parser(
        "switch",
        aliases=["start"],
        help="Starts the given task. Stops the previous InProgress task if any.",
    )
    switch.add_argument("name")
    _add_date_option(switch, "The date when the task was created. Defaults to 'today'.")
    switch.set_defaults(handler=_cmd_switch)

    stop = sub.add_parser(
        "stop", help="Stops a task and mark it as done. But you can start it again."
    )
    stop.add_argument("name")
    _add_date_option(stop, "The date when the task was created. Defaults to 'today'.")
    stop.set_defaults(handler=_cmd_stop)

    return parser


def run(service: TaskService, argv: Sequence[str] | None = None) -> int:
    """Run one command against ``service``; return the exit status."""
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 1
    if args.command is None:
        parser.print_help()
        return 0
    try:
        args.handler(service, args)
    except (LookupError, ValueError, OSError) as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point: use the tracker folder in the home directory."""
    try:
        home = Path.home()
    except (RuntimeError, KeyError) as err:
        print("Couldn't get the task tracker folder path", err)
        return 1
    folder = home / FOLDER_NAME
    if not folder.exists():
        try:
            folder.mkdir()
        except OSError:
            print("Couldn't create the task tracker folder")
            return 1
    service = TaskService(FsTaskRepository(folder))
    return run(service, argv)