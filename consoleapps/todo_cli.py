"""Interactive, colour-coded to-do list for the terminal."""

from __future__ import annotations

import argparse
from datetime import datetime
from enum import Enum
from typing import Callable, Iterable

from consoleapps.tasks import (
    DEFAULT_CAPACITY,
    Priority,
    Task,
    TaskError,
    TaskList,
    due_label,
    is_overdue,
    load_tasks,
    save_tasks,
)

__all__ = ["Color", "colorize", "category_color", "priority_label", "render_table", "main"]

DEFAULT_PATH = "tasks.dat"
_FIELD_LIMITS = {"description": 100, "deadline": 20, "category": 20}
_FILTERS = {1: "Work", 2: "Study", 3: "Personal", 4: "Other", 5: "ALL"}


class Color(Enum):
    RESET = "\033[0m"
    BLUE = "\033[94m"
    GREEN = "\033[92m"
    RED = "\033[91m"
    YELLOW = "\033[93m"
    MAGENTA = "\033[95m"
    GRAY = "\033[90m"


def colorize(text: str, color: Color) -> str:
    """Wrap ``text`` in the colour's escape code and a reset."""
    return f"{color.value}{text}{Color.RESET.value}"


def category_color(category: str) -> Color:
    return {
        "Study": Color.BLUE,
        "Work": Color.YELLOW,
        "Personal": Color.MAGENTA,
    }.get(category, Color.GRAY)


def priority_label(priority: int) -> str:
    try:
        return Priority(priority).name.title()
    except ValueError:
        return "Unknown"


def _priority_color(priority: int) -> Color:
    return {
        Priority.HIGH: Color.RED,
        Priority.MEDIUM: Color.YELLOW,
        Priority.LOW: Color.MAGENTA,
    }.get(priority, Color.RESET)


def _row(number: int, task: Task, now: datetime) -> str:
    emphasis = Color.RED if is_overdue(task, now) else Color.RESET
    return "".join([
        colorize(f"{number:<3} {task.description:<30} {task.deadline:<12} ", emphasis),
        colorize(f"{priority_label(task.priority):<10} ", _priority_color(task.priority)),
        colorize(f"{' Done' if task.completed else 'Open':<10} ",
                 Color.GREEN if task.completed else Color.RED),
        colorize(f"{task.category:<12} ", category_color(task.category)),
        colorize(f"{due_label(task, now):<10}", emphasis),
    ])


def render_table(tasks: Iterable[Task], category: str | None = None,
                 now: datetime | None = None) -> str:
    """Render tasks, in the order given, as a coloured table.

    Only tasks in ``category`` (any case; None or "ALL" for every task) are
    shown, each numbered by its position in ``tasks``.
    """
    task_list = list(tasks)
    now = now if now is not None else datetime.now()
    header = colorize(
        f"{'No':<3} {'Description':<30} {'Deadline':<12} {'Priority':<10} "
        f"{'Status':<10} {'Category':<12} {'Due In':<10}",
        Color.BLUE,
    )
    entries = TaskList(task_list, capacity=len(task_list)).filter_by_category(category)
    return "\n".join([header, *(_row(number, task, now) for number, task in entries)])


def _clip(text: str, field: str) -> str:
    limit = _FIELD_LIMITS[field] - 1
    return text.replace("\0", "").encode("utf-8")[:limit].decode("utf-8", errors="ignore")


def _read_int(prompt: str) -> int | None:
    words = input(prompt).split()
    try:
        return int(words[0])
    except (IndexError, ValueError):
        return None


def _say(text: str, color: Color) -> None:
    print(colorize(text, color))


def _header() -> str:
    return colorize(
        "\n***************************************\n"
        "*        Stylish To-Do List Menu       *\n"
        "***************************************",
        Color.BLUE,
    )


def _add(tasks: TaskList) -> None:
    if len(tasks) >= tasks.capacity:
        _say("Task list is full!", Color.RED)
        return
    description = _clip(input(colorize("Enter task description: ", Color.YELLOW)), "description")
    deadline = _clip(input("Enter deadline (e.g., 2025-06-30): "), "deadline")
    priority = _read_int("Enter priority (1 = High, 2 = Medium, 3 = Low): ")
    category = _clip(
        input(colorize("Enter category [Study, Work, Personal, Other]: ", Color.YELLOW)),
        "category",
    )
    tasks.add(Task(description, deadline, priority or 0, category))
    _say(" Task added successfully.", Color.GREEN)


def _view(tasks: TaskList) -> None:
    if not tasks:
        _say("No tasks to show.", Color.RED)
        return
    choice = _read_int(colorize(
        "\nView Options:\n1. Work\n2. Study\n3. Personal\n4. Other\n5. All\nChoose filter: ",
        Color.YELLOW,
    ))
    category = _FILTERS.get(choice)
    if category is None:
        _say("Invalid choice. Showing all tasks.", Color.RED)
        category = "ALL"
    tasks.sort_by_deadline()
    print()
    print(render_table(tasks.tasks, category, datetime.now()))


def _complete(tasks: TaskList) -> None:
    number = _read_int(colorize("Enter task number to mark as completed: ", Color.YELLOW))
    try:
        tasks.complete(number or 0)
    except TaskError:
        _say("Invalid task number!", Color.RED)
    else:
        _say("Task marked as completed.", Color.GREEN)


def _delete(tasks: TaskList) -> None:
    number = _read_int(colorize("Enter task number to delete: ", Color.YELLOW))
    try:
        tasks.delete(number or 0)
    except TaskError:
        _say("Invalid task number!", Color.RED)
    else:
        _say("Task deleted.", Color.GREEN)


def _edit(tasks: TaskList) -> None:
    if not tasks:
        _say("No tasks available to edit.", Color.RED)
        return
    number = _read_int(colorize("Enter task number to edit: ", Color.YELLOW)) or 0
    if not 1 <= number <= len(tasks):
        _say("Invalid task number!", Color.RED)
        return
    task = tasks.tasks[number - 1]
    description = input(colorize(
        f"Editing Task {number}:\nCurrent Description: {task.description}\n"
        "Enter new description (or press Enter to keep): ",
        Color.YELLOW,
    ))
    deadline = input(colorize(
        f"Current Deadline: {task.deadline}\n"
        "Enter new deadline (YYYY-MM-DD) (or press Enter to keep): ",
        Color.YELLOW,
    ))
    priority = _read_int(colorize(
        f"Current Priority: {task.priority}\n"
        "Enter new priority (1=High, 2=Medium, 3=Low) or 0 to keep: ",
        Color.YELLOW,
    ))
    tasks.edit(
        number,
        description=_clip(description, "description") if description else None,
        deadline=_clip(deadline, "deadline") if deadline else None,
        priority=priority,
    )
    _say("Task updated successfully!", Color.GREEN)


def _save(tasks: TaskList, path: str) -> None:
    try:
        save_tasks(tasks, path)
    except (OSError, TaskError):
        _say("Failed to save tasks.", Color.RED)


def main(argv: list[str] | None = None) -> int:
    """Run the interactive to-do list menu."""
    parser = argparse.ArgumentParser(prog="todo", description="Colour-coded to-do list.")
    parser.add_argument("--file", default=DEFAULT_PATH, help="task file")
    args = parser.parse_args(argv)
    loaded = load_tasks(args.file)[:DEFAULT_CAPACITY]
    tasks = TaskList(loaded, capacity=DEFAULT_CAPACITY)

    actions: dict[int, Callable[[TaskList], None]] = {
        1: _add, 2: _view, 3: _complete, 4: _delete, 5: _edit,
    }
    menu = "1. Add Task\n2. View Tasks\n3. Mark Task as Completed\n4. Delete Task\n5. Edit Task\n6. Exit"
    try:
        while True:
            print(_header())
            print(colorize(menu, Color.BLUE))
            choice = _read_int(colorize("Choose an option: ", Color.YELLOW))
            if choice == 6:
                _save(tasks, args.file)
                _say("Exiting program...", Color.GREEN)
                return 0
            action = actions.get(choice)
            if action is None:
                _say("Invalid choice. Try again.", Color.RED)
            else:
                action(tasks)
    except EOFError:
        print()
        return 0