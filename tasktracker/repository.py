"""Task storage: the repository interface and a JSON-file implementation."""

from __future__ import annotations

import dataclasses
import json
from abc import ABC, abstractmethod
from pathlib import Path

from tasktracker.models import Task, hash_id

TASKS_FILE = "tasks.json"
SELECTED_FILE = "selected.json"


class TaskNotFoundError(LookupError):
    """Raised when no task has the requested identifier."""


class TaskExistsError(ValueError):
    """Raised when a task with the same identifier is already stored."""


class TaskRepository(ABC):
    """Persistent store of tasks and of the currently selected task."""

    @abstractmethod
    def save(self, task: Task) -> None:
        """Store a new task."""

    @abstractmethod
    def update(self, id: str, task: Task) -> None:
        """Replace a stored task."""

    @abstractmethod
    def get(self, id: str) -> Task:
        """Return the task with the given identifier."""

    @abstractmethod
    def get_all(self) -> list[Task]:
        """Return every stored task."""

    @abstractmethod
    def delete(self, id: str) -> None:
        """Remove the task with the given identifier."""

    @abstractmethod
    def select_task(self, task: Task) -> None:
        """Remember ``task`` as the selected one."""

    @abstractmethod
    def get_selected_task(self) -> Task | None:
        """Return the selected task, or None when there is none."""


class FsTaskRepository(TaskRepository):
    """Keeps tasks as JSON files inside a directory."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    @property
    def _tasks_file(self) -> Path:
        return self.path / TASKS_FILE

    @property
    def _selected_file(self) -> Path:
        return self.path / SELECTED_FILE

    def save(self, task: Task) -> None:
        tasks = self.get_all()
        if any(t.id == task.id for t in tasks):
            raise TaskExistsError(f'The task "{task.id}" already exists')
        tasks.append(task)
        _write_tasks(self._tasks_file, tasks)

    def update(self, id: str, task: Task) -> None:
        """Replace the stored task matching ``task.id``; name and creation time are kept."""
        tasks = self.get_all()
        index = _index_of(tasks, task.id)
        if index is None:
            raise TaskNotFoundError(f'The task "{task.id}" wasn\'t found')
        stored = tasks[index]
        tasks[index] = dataclasses.replace(task, name=stored.name, created_at=stored.created_at)
        _write_tasks(self._tasks_file, tasks)

    def get(self, id: str) -> Task:
        tasks = self.get_all()
        index = _index_of(tasks, id)
        if index is None:
            raise TaskNotFoundError(f'Task "{id}" not found')
        return tasks[index]

    def get_all(self) -> list[Task]:
        try:
            return _read_tasks(self._tasks_file)
        except FileNotFoundError:
            return []

    def delete(self, id: str) -> None:
        tasks = self.get_all()
        index = _index_of(tasks, id)
        if index is None:
            raise TaskNotFoundError(f'Task "{id}" not found')
        del tasks[index]
        _write_tasks(self._tasks_file, tasks)

    def select_task(self, task: Task) -> None:
        _write_tasks(self._selected_file, [task])

    def get_selected_task(self) -> Task | None:
        try:
            selected = _read_tasks(self._selected_file)
        except FileNotFoundError:
            return None
        if not selected:
            return None
        first = selected[0]
        try:
            return self.get(hash_id(first.name, first.created_at))
        except TaskNotFoundError:
            return None


def _index_of(tasks: list[Task], task_id: str) -> int | None:
    return next((i for i, t in enumerate(tasks) if t.id == task_id), None)


def _read_tasks(path: Path) -> list[Task]:
    data = json.loads(path.read_text(encoding="utf-8"))
    return [Task.from_dict(item) for item in data or []]


def _write_tasks(path: Path, tasks: list[Task]) -> None:
    path.write_text(json.dumps([t.to_dict() for t in tasks]), encoding="utf-8")