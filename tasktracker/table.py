"""Plain-text table rendering of tasks inside a rounded box."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime

from tasktracker.models import Task, format_duration

COLUMNS: tuple[tuple[str, int], ...] = (
    ("Name", 30),
    ("Status", 10),
    ("Duration", 15),
    ("Created At", 20),
    ("Started At", 20),
    ("Finished At", 20),
    ("Tags", 20),
)
TIME_FORMAT = "%d-%m-%Y %H:%M:%S"
EMPTY = "---"
ELLIPSIS = "…"


def _timestamp(moment: datetime | None) -> str:
    return EMPTY if moment is None else moment.strftime(TIME_FORMAT)


def _cell(text: str, width: int) -> str:
    if len(text) > width:
        text = text[: width - 1] + ELLIPSIS
    return f" {text.ljust(width)} "


def _line(values: Iterable[str]) -> str:
    return "".join(_cell(value, width) for value, (_, width) in zip(values, COLUMNS))


def _row(task: Task) -> list[str]:
    return [
        task.name,
        task.status.value if task.status else "",
        format_duration(task.duration),
        _timestamp(task.created_at),
        _timestamp(task.started_at),
        _timestamp(task.finished_at),
        "|".join(tag.name for tag in task.tags),
    ]


def render_table(tasks: Sequence[Task]) -> str:
    """Render tasks as a fixed-width table framed by a rounded border."""
    lines = [_line(title for title, _ in COLUMNS)]
    lines.extend(_line(_row(task)) for task in tasks)
    width = max(len(line) for line in lines)
    blank = " " * width
    body = [f" {line.ljust(width)} " for line in [blank, *lines, blank]]
    inner = width + 2
    return "\n".join(
        [
            "╭" + "─" * inner + "╮",
            *(f"│{line}│" for line in body),
            "╰" + "─" * inner + "╯",
        ]
    )


def print_table(tasks: Sequence[Task]) -> None:
    """Print the rendered table of tasks to standard output."""
    print(render_table(tasks))