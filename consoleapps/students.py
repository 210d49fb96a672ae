"""Student record management backed by a file of fixed-size binary records."""

from __future__ import annotations

import argparse
import os
import struct
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator

__all__ = [
    "StudentError",
    "InvalidRollError",
    "DuplicateStudentError",
    "StoreFullError",
    "Student",
    "StudentStore",
    "is_valid_roll",
    "encode_record",
    "decode_records",
    "format_table",
    "main",
    "RECORD_SIZE",
]

DEFAULT_PATH = "students.dat"
DEFAULT_CSV_PATH = "students_export.csv"
DEFAULT_CAPACITY = 100
MAX_SEARCH_ATTEMPTS = 3

_FIELD_SIZES = (50, 50, 10)
_RECORD = struct.Struct("50s50s10s")
RECORD_SIZE = _RECORD.size


class StudentError(Exception):
    """Base error for student record operations."""


class InvalidRollError(StudentError):
    """The roll number is not of the form AM followed by five digits."""


class DuplicateStudentError(StudentError):
    """A student with the same roll number is already stored."""


class StoreFullError(StudentError):
    """The store has accepted as many students as it may this session."""


@dataclass(frozen=True)
class Student:
    first_name: str
    last_name: str
    roll: str


def is_valid_roll(roll: str) -> bool:
    """True for exactly "AM" followed by five ASCII digits."""
    return (
        len(roll) == 7
        and roll.startswith("AM")
        and all(ch in "0123456789" for ch in roll[2:])
    )


def _encode_field(text: str, size: int, label: str) -> bytes:
    raw = text.encode("utf-8")
    if b"\0" in raw:
        raise StudentError(f"{label} must not contain NUL characters")
    if len(raw) >= size:
        raise StudentError(f"{label} is longer than {size - 1} bytes")
    return raw


def encode_record(student: Student) -> bytes:
    """Pack a student into one NUL-padded fixed-size record."""
    fields = zip(
        (student.first_name, student.last_name, student.roll),
        _FIELD_SIZES,
        ("first name", "last name", "roll number"),
    )
    return _RECORD.pack(*(_encode_field(text, size, label) for text, size, label in fields))


def _decode_field(raw: bytes) -> str:
    return raw.split(b"\0", 1)[0].decode("utf-8", errors="replace")


def _iter_records(data: bytes) -> Iterator[tuple[bytes, Student]]:
    usable = len(data) - len(data) % RECORD_SIZE
    for offset in range(0, usable, RECORD_SIZE):
        raw = data[offset:offset + RECORD_SIZE]
        first, last, roll = (_decode_field(field) for field in _RECORD.unpack(raw))
        yield raw, Student(first, last, roll)


def decode_records(data: bytes) -> list[Student]:
    """Unpack every whole record in ``data``; a trailing partial one is ignored."""
    return [student for _, student in _iter_records(data)]


def format_table(students: list[Student]) -> str:
    """Render students as a numbered table with a header."""
    lines = [
        f"{'No':<5} {'First Name':<18} {'Last Name':<18} {'Roll':<15}",
        "-" * 63,
    ]
    lines.extend(
        f"{number:<5} {s.first_name:<20} {s.last_name:<20} {s.roll:<10}"
        for number, s in enumerate(students, start=1)
    )
    return "\n".join(lines)


class StudentStore:
    """Student records kept in a binary file.

    ``capacity`` limits how many students one store object may add.
    """

    def __init__(self, path: str | os.PathLike = DEFAULT_PATH,
                 capacity: int = DEFAULT_CAPACITY) -> None:
        self.path = Path(path)
        self.capacity = capacity
        self._added = 0

    def _read(self) -> bytes:
        try:
            return self.path.read_bytes()
        except FileNotFoundError:
            return b""

    def students(self) -> list[Student]:
        """All stored students in file order; empty when there is no file."""
        return decode_records(self._read())

    def add(self, student: Student) -> None:
        """Validate and append a student to the file."""
        if not is_valid_roll(student.roll):
            raise InvalidRollError(
                f"invalid roll number {student.roll!r}: expected AM followed by 5 digits"
            )
        if self.find_by_roll(student.roll) is not None:
            raise DuplicateStudentError(
                f"student with roll number {student.roll} already exists"
            )
        if self._added >= self.capacity:
            raise StoreFullError("maximum number of students reached")
        record = encode_record(student)
        with self.path.open("ab") as handle:
            handle.write(record)
        self._added += 1

    def find_by_roll(self, roll: str) -> Student | None:
        return next((s for s in self.students() if s.roll == roll), None)

    def find_by_last_name(self, last_name: str) -> list[Student]:
        return [s for s in self.students() if s.last_name == last_name]

    def delete(self, roll: str) -> bool:
        """Remove every record with ``roll``; True if any was removed."""
        if not self.path.exists():
            raise StudentError(f"cannot open {self.path}")
        records = list(_iter_records(self.path.read_bytes()))
        kept = [raw for raw, student in records if student.roll != roll]
        scratch = self.path.with_name(self.path.name + ".tmp")
        scratch.write_bytes(b"".join(kept))
        os.replace(scratch, self.path)
        return len(kept) != len(records)

    def export_csv(self, csv_path: str | os.PathLike = DEFAULT_CSV_PATH) -> int:
        """Write the records as CSV; returns the number of rows written."""
        if not self.path.exists():
            raise StudentError(f"cannot open {self.path}")
        students = self.students()
        with open(csv_path, "w", encoding="utf-8", newline="") as handle:
            handle.write("Roll,First Name,Last Name\n")
            for s in students:
                handle.write(f"{s.roll},{s.first_name},{s.last_name}\n")
        return len(students)


def _read_word(prompt: str) -> str:
    while True:
        words = input(prompt).split()
        if words:
            return words[0]


def _read_int(prompt: str) -> int | None:
    try:
        return int(_read_word(prompt))
    except ValueError:
        return None


def _print_student(student: Student) -> None:
    print(f"First Name: {student.first_name}")
    print(f"Last Name: {student.last_name}")
    print(f"Roll Number: {student.roll}")


def _add(store: StudentStore) -> None:
    first = _read_word("Enter First Name: ")
    last = _read_word("Enter Last Name: ")
    roll = _read_word("Enter Roll Number (e.g., AM12345): ")
    try:
        store.add(Student(first, last, roll))
    except InvalidRollError:
        print(" Invalid Roll Number. It must be in the form AM12345.")
        print(" Format: AM followed by 5 digits. It should be on your email. Please check it.")
    except DuplicateStudentError:
        print(f" Student with roll number {roll} already exists. Cannot add duplicate.")
    except StoreFullError:
        print(" Maximum number of students reached in memory.")
    except StudentError as exc:
        print(f" {exc}")
    else:
        print(" Student added successfully!")


def _display(store: StudentStore) -> None:
    if not store.path.exists():
        print("No records found.")
        return
    print("\n" + format_table(store.students()))


def _show_by_roll(store: StudentStore, roll: str) -> bool:
    student = store.find_by_roll(roll)
    if student is None:
        return False
    print("\n Student found:")
    _print_student(student)
    return True


def _show_by_last_name(store: StudentStore, last_name: str) -> bool:
    matches = store.find_by_last_name(last_name)
    if matches:
        print(f'\n Students with last name "{last_name}":')
    for student in matches:
        print("--------------------------")
        _print_student(student)
    return bool(matches)


def _search(store: StudentStore) -> None:
    print("\nSearch by:")
    print("1. Roll Number")
    print("2. Last Name")
    choice = _read_int("Enter choice (1 or 2): ")
    searches: dict[int, tuple[str, Callable[[StudentStore, str], bool]]] = {
        1: ("Enter roll number: ", _show_by_roll),
        2: ("Enter last name: ", _show_by_last_name),
    }
    if choice not in searches:
        print(" Invalid choice.")
        return
    prompt, show = searches[choice]
    for attempt in range(1, MAX_SEARCH_ATTEMPTS + 1):
        if not store.path.exists():
            print("No records found.")
            return
        if show(store, _read_word(prompt)):
            return
        if attempt < MAX_SEARCH_ATTEMPTS:
            print(f" No match. Try again ({attempt}/{MAX_SEARCH_ATTEMPTS} attempts).")
    print(" No student found after 3 attempts. Returning to main menu...")


def _delete(store: StudentStore) -> None:
    if not store.path.exists():
        print("Error opening file!")
        return
    roll = _read_word("Enter roll number to delete: ")
    if store.delete(roll):
        print(" Student record deleted successfully!")
    else:
        print(f"Student with roll number {roll} not found.")


def _export(store: StudentStore, csv_path: str) -> None:
    try:
        store.export_csv(csv_path)
    except (StudentError, OSError):
        print(" Error opening file(s) for export.")
    else:
        print(f" Exported successfully to {csv_path}")


def main(argv: list[str] | None = None) -> int:
    """Run the interactive student record menu."""
    parser = argparse.ArgumentParser(prog="students", description="Student record management.")
    parser.add_argument("--file", default=DEFAULT_PATH, help="record file")
    parser.add_argument("--csv", default=DEFAULT_CSV_PATH, help="CSV export file")
    args = parser.parse_args(argv)
    store = StudentStore(args.file)

    actions: dict[int, Callable[[], None]] = {
        1: lambda: _add(store),
        2: lambda: _display(store),
        3: lambda: _search(store),
        4: lambda: _delete(store),
        6: lambda: _export(store, args.csv),
    }
    try:
        while True:
            print("\n========== Student Record Management ==========")
            print("1. Add Student")
            print("2. Display All Students")
            print("3. Search Student by Roll Number")
            print("4. Delete Student")
            print("5. Exit")
            print("6. Export Students to CSV")
            choice = _read_int("Enter your choice: ")
            if choice == 5:
                print("Exiting...")
                return 0
            action = actions.get(choice)
            if action is None:
                print("Invalid choice. Try again.")
            else:
                action()
    except EOFError:
        print()
        return 0