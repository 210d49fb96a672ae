"""To-do tasks: deadlines, priorities, categories and binary persistence."""

from __future__ import annotations

import os
import re
import struct
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import IntEnum
from pathlib import Path
from typing import Iterable, Iterator

__all__ = [
    "TaskError",
    "Priority",
    "Task",
    "TaskList",
    "parse_date",
    "days_remaining",
    "due_label",
    "is_overdue",
    "save_tasks",
    "load_tasks",
    "TASK_RECORD_SIZE",
    "DEFAULT_CAPACITY",
]

DEFAULT_PATH = "tasks.dat"
DEFAULT_CAPACITY = 100
SECONDS_PER_DAY = 60 * 60 * 24

_FIELD_SIZES = {"description": 100, "deadline": 20, "category": 20}
_COUNT = struct.Struct("<i")
_RECORD = struct.Struct("<100s20sii20s")
TASK_RECORD_SIZE = _RECORD.size

_DATE = re.compile(r"\s*([+-]?\d+)(?:-\s*([+-]?\d+)(?:-\s*([+-]?\d+))?)?")


class TaskError(Exception):
    """Raised when a task operation cannot be carried out."""


class Priority(IntEnum):
    HIGH = 1
    MEDIUM = 2
    LOW = 3


@dataclass
class Task:
    description: str
    deadline: str
    priority: int
    category: str
    completed: bool = False


def parse_date(text: str) -> datetime:
    """Read a "YYYY-MM-DD" deadline as local midnight.

    Missing fields count as zero and out-of-range months and days roll over
    into neighbouring ones. Dates before year 1 or after year 9999 are
    clamped to ``datetime.min`` and ``datetime.max``.
    """
    match = _DATE.match(text)
    fields = [int(part) if part else 0 for part in match.groups()] if match else [0, 0, 0]
    year, month, day = fields
    year += (month - 1) // 12
    month_index = (month - 1) % 12
    if year < 1:
        return datetime.min
    if year > 9999:
        return datetime.max
    try:
        return datetime(year, month_index + 1, 1) + timedelta(days=day - 1)
    except OverflowError:
        return datetime.min if day < 1 else datetime.max


def days_remaining(task: Task, now: datetime) -> float:
    """Days from ``now`` until the task's deadline; negative once it has passed."""
    return (parse_date(task.deadline) - now).total_seconds() / SECONDS_PER_DAY


def due_label(task: Task, now: datetime) -> str:
    """Text for the "Due In" column."""
    if task.completed:
        return "—"
    remaining = days_remaining(task, now)
    if remaining < 0:
        return "Overdue"
    return f"{remaining:.0f} days"


def is_overdue(task: Task, now: datetime) -> bool:
    return not task.completed and days_remaining(task, now) < 0


def _encode_field(text: str, name: str) -> bytes:
    size = _FIELD_SIZES[name]
    raw = text.encode("utf-8")
    if b"\0" in raw:
        raise TaskError(f"{name} must not contain NUL characters")
    if len(raw) >= size:
        raise TaskError(f"{name} is longer than {size - 1} bytes")
    return raw


def _decode_field(raw: bytes) -> str:
    return raw.split(b"\0", 1)[0].decode("utf-8", errors="replace")


def save_tasks(tasks: Iterable[Task], path: str | os.PathLike = DEFAULT_PATH) -> None:
    """Write the task count followed by one fixed-size record per task."""
    records = [
        _RECORD.pack(
            _encode_field(task.description, "description"),
            _encode_field(task.deadline, "deadline"),
            int(task.priority),
            1 if task.completed else 0,
            _encode_field(task.category, "category"),
        )
        for task in tasks
    ]
    Path(path).write_bytes(_COUNT.pack(len(records)) + b"".join(records))


def load_tasks(path: str | os.PathLike = DEFAULT_PATH) -> list[Task]:
    """Read tasks written by :func:`save_tasks`; a missing file gives none."""
    try:
        data = Path(path).read_bytes()
    except FileNotFoundError:
        return []
    if len(data) < _COUNT.size:
        return []
    (count,) = _COUNT.unpack_from(data)
    available = (len(data) - _COUNT.size) // TASK_RECORD_SIZE
    tasks = []
    for position in range(max(0, min(count, available))):
        offset = _COUNT.size + position * TASK_RECORD_SIZE
        description, deadline, priority, completed, category = _RECORD.unpack_from(data, offset)
        tasks.append(
            Task(
                _decode_field(description),
                _decode_field(deadline),
                priority,
                _decode_field(category),
                completed != 0,
            )
        )
    return tasks


class TaskList:
    """An ordered, bounded list of tasks addressed by 1-based numbers."""

    def __init__(self, tasks: Iterable[Task] | None = None,
                 capacity: int = DEFAULT_CAPACITY) -> None:
        self.tasks: list[Task] = list(tasks) if tasks is not None else []
        self.capacity = capacity
        if len(self.tasks) > capacity:
            raise TaskError(f"more than {capacity} tasks")

    def __len__(self) -> int:
        return len(self.tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self.tasks)

    def _index(self, number: int) -> int:
        if not 1 <= number <= len(self.tasks):
            raise TaskError(f"invalid task number {number}")
        return number - 1

    def add(self, task: Task) -> None:
        if len(self.tasks) >= self.capacity:
            raise TaskError("task list is full")
        self.tasks.append(task)

    def complete(self, number: int) -> Task:
        task = self.tasks[self._index(number)]
        task.completed = True
        return task

    def delete(self, number: int) -> Task:
        return self.tasks.pop(self._index(number))

    def edit(self, number: int, description: str | None = None,
             deadline: str | None = None, priority: int | None = None) -> Task:
        """Change the given fields; a priority outside 1-3 leaves it unchanged."""
        if not self.tasks:
            raise TaskError("no tasks available to edit")
        task = self.tasks[self._index(number)]
        if description is not None:
            task.description = description
        if deadline is not None:
            task.deadline = deadline
        if priority is not None and priority in Priority.__members__.values():
            task.priority = int(priority)
        return task

    def sort_by_deadline(self) -> None:
        """Order tasks by deadline, earliest first."""
        self.tasks.sort(key=lambda task: parse_date(task.deadline))

    def filter_by_category(self, category: str | None) -> list[tuple[int, Task]]:
        """Numbered tasks whose category matches, ignoring case.

        ``None`` or "ALL" selects every task. Numbers are positions in the
        whole list, so they stay valid for :meth:`complete` and friends.
        """
        everything = category is None or category == "ALL"
        return [
            (number, task)
            for number, task in enumerate(self.tasks, start=1)
            if everything or task.category.casefold() == category.casefold()
        ]