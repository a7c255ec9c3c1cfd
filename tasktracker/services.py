"""Task operations on top of a repository: create, start, stop and filter."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from tasktracker.models import Task, TaskStatus, hash_id, is_blank
from tasktracker.repository import TaskExistsError, TaskNotFoundError, TaskRepository


class TaskValidationError(ValueError):
    """Raised when a task or a change to it is not acceptable."""


@dataclass
class FindTasksFilter:
    """Criteria for :meth:`TaskService.find`."""

    day: datetime | None = None
    status: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)


def _day(moment: datetime | None) -> str:
    if moment is None:
        return "01/01/0001"
    return f"{moment.day:02d}/{moment.month:02d}/{moment.year:04d}"


def _now() -> datetime:
    return datetime.now().astimezone()


def validate_task(task: Task) -> None:
    """Check the task's name and fill in a missing creation time and id."""
    if is_blank(task.name):
        raise TaskValidationError("Task name can not be blank")
    if task.created_at is None:
        task.created_at = _now()
    if is_blank(task.id):
        task.id = hash_id(task.name, task.created_at)


class TaskService:
    """Task operations, addressing tasks by name and creation day."""

    def __init__(self, repository: TaskRepository) -> None:
        self.repository = repository

    def save(self, task: Task) -> None:
        """Validate and store a new task; fills in its id and creation time."""
        try:
            existing = self.get(task.name, task.created_at)
        except TaskNotFoundError:
            existing = None
        if existing is not None and existing.name:
            raise TaskExistsError(f'Task "{task.name}" already exists')
        validate_task(task)
        self.repository.save(task)

    def update(self, name: str, date: datetime | None, task: Task) -> None:
        if name != task.name:
            raise TaskValidationError(f"You can't change the name of the task: {name}")
        if _day(task.created_at) != _day(date):
            raise TaskValidationError(
                f"You can't change the creation date of the task: {name}"
            )
        validate_task(task)
        self.repository.update(hash_id(name, date), task)

    def get(self, name: str, date: datetime | None) -> Task:
        try:
            return self.repository.get(hash_id(name, date))
        except TaskNotFoundError as err:
            day = _day(date).replace("/", "-")
            raise TaskNotFoundError(
                f'Task "{name}" not found from date "{day}"'
            ) from err

    def list(self) -> list[Task]:
        return self.repository.get_all()

    def delete(self, name: str, date: datetime | None) -> None:
        self.repository.delete(hash_id(name, date))

    def start(self, name: str, date: datetime | None) -> None:
        """Mark the task in progress from now on."""
        task = self.get(name, date)
        now = _now()
        if task.started_at is None:
            task.started_at = now
        task.finished_at = None
        task.status = TaskStatus.IN_PROGRESS
        task.in_progress = now
        self.update(name, date, task)

    def stop(self, name: str, date: datetime | None) -> None:
        """Mark the task done, adding the time since it was last started."""
        task = self.get(name, date)
        now = _now()
        if task.in_progress is not None:
            task.duration += now - task.in_progress
        task.in_progress = None
        task.status = TaskStatus.DONE
        task.finished_at = now
        self.update(name, date, task)

    def find(self, filter: FindTasksFilter) -> list[Task]:
        """Tasks started on ``filter.day`` or having one of ``filter.status``.

        With neither criterion given, nothing matches.
        """
        found = []
        for task in self.list():
            skip = True
            if filter.day is not None:
                skip = _day(task.started_at) != _day(filter.day)
            if filter.status:
                status = task.status.value if task.status else ""
                skip = status not in filter.status and skip
            if not skip:
                found.append(task)
        return found

    def select_task(self, task: Task) -> None:
        self.repository.select_task(task)

    def get_selected_task(self) -> Task | None:
        return self.repository.get_selected_task()