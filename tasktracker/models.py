"""Task and tag models, task identifiers and display helpers."""

from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any

_ZERO_TIME = "0001-01-01T00:00:00Z"
_TIME_RE = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})$"
)


class TaskStatus(str, Enum):
    """Lifecycle state of a task."""

    TODO = "todo"
    IN_PROGRESS = "inprogress"
    DONE = "done"
    WONTDO = "wontdo"


@dataclass
class Tag:
    """A label attached to a task."""

    name: str


@dataclass
class Task:
    """A tracked task. Unset timestamps are ``None``."""

    id: str = ""
    name: str = ""
    status: TaskStatus | None = None
    duration: timedelta = field(default_factory=timedelta)
    created_at: datetime | None = None
    started_at: datetime | None = None
    finished_at: datetime | None = None
    in_progress: datetime | None = None
    tags: list[Tag] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready representation used on disk."""
        return {
            "id": self.id,
            "name": self.name,
            "status": self.status.value if self.status else "",
            "duration": _duration_to_ns(self.duration),
            "createdAt": _format_time(self.created_at),
            "startedAt": _format_time(self.started_at),
            "finishedAt": _format_time(self.finished_at),
            "inProgress": _format_time(self.in_progress),
            "tags": [{"name": tag.name} for tag in self.tags],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Task:
        """Build a task from its on-disk representation."""
        status = data.get("status") or ""
        tags = data.get("tags") or []
        return cls(
            id=data.get("id") or "",
            name=data.get("name") or "",
            status=TaskStatus(status) if status else None,
            duration=timedelta(microseconds=int(data.get("duration") or 0) // 1000),
            created_at=_parse_time(data.get("createdAt")),
            started_at=_parse_time(data.get("startedAt")),
            finished_at=_parse_time(data.get("finishedAt")),
            in_progress=_parse_time(data.get("inProgress")),
            tags=[Tag(name=tag.get("name") or "") for tag in tags],
        )


def is_blank(s: str) -> bool:
    """Return True when the string is empty or only whitespace."""
    return s.strip() == ""


def _format_day(moment: datetime | None) -> str:
    if moment is None:
        return "01/01/0001"
    return f"{moment.day:02d}/{moment.month:02d}/{moment.year:04d}"


def hash_id(name: str, created_at: datetime | None) -> str:
    """Identifier of a task: its normalised name plus its creation day, hashed."""
    data = name.strip().lower() + _format_day(created_at)
    return hashlib.sha256(data.encode("utf-8")).hexdigest()


def new_task(name: str) -> Task:
    """Create a to-do task named ``name``, created now."""
    created_at = datetime.now().astimezone()
    name = name.strip()
    return Task(
        id=hash_id(name, created_at),
        name=name,
        status=TaskStatus.TODO,
        created_at=created_at,
    )


def _frac(value: int, unit: int) -> str:
    whole, rest = divmod(value, unit)
    if not rest:
        return str(whole)
    digits = len(str(unit)) - 1
    return f"{whole}." + f"{rest:0{digits}d}".rstrip("0")


def format_duration(duration: timedelta) -> str:
    """Render a duration compactly, e.g. ``1h2m3.5s`` or ``250ms``."""
    ns = _duration_to_ns(duration)
    if ns == 0:
        return "0s"
    sign = "-" if ns < 0 else ""
    total = abs(ns)
    if total < 1_000:
        text = f"{total}ns"
    elif total < 1_000_000:
        text = _frac(total, 1_000) + "µs"
    elif total < 1_000_000_000:
        text = _frac(total, 1_000_000) + "ms"
    else:
        seconds, rest = divmod(total, 1_000_000_000)
        hours, remainder = divmod(seconds, 3600)
        minutes, secs = divmod(remainder, 60)
        sec_text = _frac(secs * 1_000_000_000 + rest, 1_000_000_000) + "s"
        if hours:
            text = f"{hours}h{minutes}m{sec_text}"
        elif minutes:
            text = f"{minutes}m{sec_text}"
        else:
            text = sec_text
    return sign + text


def _duration_to_ns(duration: timedelta) -> int:
    return (
        (duration.days * 86_400 + duration.seconds) * 1_000_000_000
        + duration.microseconds * 1_000
    )


def _format_time(moment: datetime | None) -> str:
    if moment is None:
        return _ZERO_TIME
    if moment.tzinfo is None:
        moment = moment.astimezone()
    text = (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
    )
    if moment.microsecond:
        text += "." + f"{moment.microsecond:06d}".rstrip("0")
    offset = moment.utcoffset() or timedelta(0)
    if offset == timedelta(0):
        return text + "Z"
    sign = "-" if offset < timedelta(0) else "+"
    minutes = abs(int(offset.total_seconds())) // 60
    return text + f"{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def _parse_time(text: str | None) -> datetime | None:
    if not text or text == _ZERO_TIME:
        return None
    match = _TIME_RE.match(text)
    if match is None:
        raise ValueError(f"invalid timestamp: {text!r}")
    year, month, day, hour, minute, second, frac, zone = match.groups()
    if zone == "Z":
        tz = timezone.utc
    else:
        sign = -1 if zone[0] == "-" else 1
        tz = timezone(sign * timedelta(hours=int(zone[1:3]), minutes=int(zone[4:6])))
    micro = int((frac or "").ljust(6, "0")[:6])
    moment = datetime(
        int(year), int(month), int(day), int(hour), int(minute), int(second), micro, tzinfo=tz
    )
    if (
        moment.year == 1
        and moment.replace(tzinfo=None) == datetime(1, 1, 1)
        and moment.utcoffset() == timedelta(0)
    ):
        return None
    return moment