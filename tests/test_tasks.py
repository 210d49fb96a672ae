from datetime import datetime

import pytest

from consoleapps.tasks import (
    TASK_RECORD_SIZE,
    Priority,
    Task,
    TaskError,
    TaskList,
    days_remaining,
    due_label,
    is_overdue,
    load_tasks,
    parse_date,
    save_tasks,
)


def make(description="Write report", deadline="2025-06-30", priority=1,
         category="Work", completed=False):
    return Task(description, deadline, priority, category, completed)


def test_parse_date_plain():
    assert parse_date("2025-06-30") == datetime(2025, 6, 30)


def test_parse_date_day_zero_rolls_back():
    assert parse_date("2025-06-00") == datetime(2025, 5, 31)


def test_parse_date_month_overflow_rolls_forward():
    assert parse_date("2025-13-01") == datetime(2026, 1, 1)


def test_parse_date_garbage_is_earliest():
    assert parse_date("garbage") == datetime.min


def test_parse_date_is_ordered():
    assert parse_date("2024-12-31") < parse_date("2025-01-01") < parse_date("2025-01-02")


def test_days_remaining_sign():
    now = datetime(2025, 6, 15, 12)
    assert days_remaining(make(deadline="2025-07-01"), now) > 0
    assert days_remaining(make(deadline="2025-06-01"), now) < 0


def test_due_label_completed():
    task = make(deadline="2000-01-01", completed=True)
    assert due_label(task, datetime(2025, 1, 1)) == "—"
    assert not is_overdue(task, datetime(2025, 1, 1))


def test_due_label_overdue():
    task = make(deadline="2000-01-01")
    assert due_label(task, datetime(2025, 1, 1)) == "Overdue"
    assert is_overdue(task, datetime(2025, 1, 1))


def test_due_label_days_left():
    task = make(deadline="2025-06-30")
    assert due_label(task, datetime(2025, 6, 28)) == "2 days"


def test_save_load_round_trip(tmp_path):
    path = tmp_path / "tasks.dat"
    tasks = [make(), make("Read book", "2025-07-01", 3, "Personal", True)]
    save_tasks(tasks, path)
    assert load_tasks(path) == tasks


def test_save_layout(tmp_path):
    path = tmp_path / "tasks.dat"
    save_tasks([make(), make()], path)
    data = path.read_bytes()
    assert len(data) == 4 + 2 * TASK_RECORD_SIZE
    assert int.from_bytes(data[:4], "little") == 2


def test_load_missing_file(tmp_path):
    assert load_tasks(tmp_path / "absent.dat") == []


def test_load_ignores_truncated_record(tmp_path):
    path = tmp_path / "tasks.dat"
    save_tasks([make(), make("Second")], path)
    data = path.read_bytes()
    path.write_bytes(data[:-1])
    assert load_tasks(path) == [make()]


def test_save_rejects_long_description(tmp_path):
    with pytest.raises(TaskError):
        save_tasks([make(description="x" * 100)], tmp_path / "tasks.dat")


def test_add_until_full():
    tasks = TaskList(capacity=1)
    tasks.add(make())
    with pytest.raises(TaskError):
        tasks.add(make())
    assert len(tasks) == 1


def test_init_over_capacity():
    with pytest.raises(TaskError):
        TaskList([make(), make()], capacity=1)


def test_complete_and_invalid_number():
    tasks = TaskList([make()])
    assert tasks.complete(1).completed is True
    with pytest.raises(TaskError):
        tasks.complete(2)
    with pytest.raises(TaskError):
        tasks.complete(0)


def test_delete_shifts_later_tasks():
    first, second, third = make("a"), make("b"), make("c")
    tasks = TaskList([first, second, third])
    assert tasks.delete(2) is second
    assert list(tasks) == [first, third]


def test_edit_keeps_unspecified_fields():
    tasks = TaskList([make()])
    task = tasks.edit(1, description="Changed")
    assert task == make(description="Changed")


def test_edit_ignores_out_of_range_priority():
    tasks = TaskList([make(priority=Priority.LOW)])
    tasks.edit(1, priority=0)
    assert tasks.tasks[0].priority == Priority.LOW
    tasks.edit(1, deadline="2026-01-01", priority=Priority.HIGH)
    assert tasks.tasks[0].priority == Priority.HIGH
    assert tasks.tasks[0].deadline == "2026-01-01"


def test_edit_empty_list():
    with pytest.raises(TaskError):
        TaskList().edit(1, description="x")


def test_sort_by_deadline():
    tasks = TaskList([make("late", "2025-09-01"), make("early", "2025-01-01"),
                      make("mid", "2025-05-01")])
    tasks.sort_by_deadline()
    assert [t.description for t in tasks] == ["early", "mid", "late"]


def test_filter_by_category_keeps_numbers():
    tasks = TaskList([make("a", category="Work"), make("b", category="Study"),
                      make("c", category="work")])
    assert [(n, t.description) for n, t in tasks.filter_by_category("WORK")] == [
        (1, "a"), (3, "c")]
    assert len(tasks.filter_by_category("ALL")) == 3
    assert len(tasks.filter_by_category(None)) == 3