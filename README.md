# consoleapps

This package holds three small interactive terminal programs: a calculator, a student record keeper and a to-do list. Each program can also be used from Python. The package needs nothing beyond the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Calculator

```
consoleapps-calc
```

This command reads expressions from standard input and prints each result with six decimals, for example `Result: 13.000000`. If an expression cannot be evaluated, it prints `Error: Invalid expression`.

- Operators: `+ - * / % ^`, with the usual precedence. `^` is right-associative. `%` works on the truncated integer parts of its operands.
- Functions: `sqrt abs log ln exp fact sin cos tan`. `log` is base 10 and `ln` is natural. The trigonometric functions take degrees.
- `Ans` stands for the last successful result. It starts at 0.
- Enter `c` or `C` to clear the screen with the system's `cls` or `clear` command. Enter `q` or `Q`, or end the input, to quit.

From Python:

```python
from consoleapps.calculator import evaluate, CalculatorError

evaluate("(3 + 4) * 2 - 1", 0.0)   # 13.0
evaluate("Ans * 2", 13.0)          # 26.0
```

A bad expression raises `CalculatorError`, which is a `ValueError`. Examples are an unknown character or function, mismatched parentheses, division or modulo by zero, the square root of a negative number, the logarithm of a non-positive number, and the factorial of a negative number or a non-integer.

The steps of the evaluation are also available on their own:

- `tokenize`
- `to_postfix`
- `eval_postfix`
- `apply_operator`
- `apply_function`
- `factorial`
- `format_result`

## Student records

```
consoleapps-students [--file students.dat] [--csv students_export.csv]
```

This command runs a menu with the following options:

- add a student
- list all students as a table
- search by roll number or by last name, with up to three attempts
- delete by roll number
- export to CSV, with the header `Roll,First Name,Last Name`

Roll numbers must have the form `AM12345`, which is `AM` followed by five digits. Duplicate roll numbers are refused.

Records are kept in a binary file of fixed-size records. Each record holds a first name of up to 49 bytes, a last name of up to 49 bytes and a roll number of up to 9 bytes, all in UTF-8.

From Python:

```python
from consoleapps.students import Student, StudentStore

store = StudentStore("students.dat", 100)
store.add(Student("Ada", "Lovelace", "AM12345"))
store.find_by_roll("AM12345")        # Student(first_name='Ada', ...)
store.find_by_last_name("Lovelace")  # [Student(...)]
store.delete("AM12345")              # True
```

The second argument of `StudentStore` sets how many students that store object may add. `add` can raise these errors, all of which are `StudentError` subclasses:

- `InvalidRollError`
- `DuplicateStudentError`
- `StoreFullError`

`encode_record`, `decode_records` and `format_table` work on the record format and the table directly.

## To-do list

```
consoleapps-todo [--file tasks.dat]
```

This command manages tasks. Each task has:

- a description
- a deadline (`YYYY-MM-DD`)
- a priority (1 High, 2 Medium, 3 Low)
- a category (Study, Work, Personal, Other)

You can add, view, complete, edit and delete tasks, up to 100 of them. The view sorts tasks by deadline and can be filtered by category. The filter ignores case. The view shows the days left until each deadline and highlights overdue tasks. Colours use ANSI escape codes.

Tasks are loaded from the file at start. They are saved only when you choose Exit from the menu. Ending the input quits without saving.

From Python:

```python
from consoleapps.tasks import Task, TaskList, save_tasks, load_tasks
from consoleapps.todo_cli import render_table

tasks = TaskList([Task("Write report", "2025-06-30", 1, "Work")])
tasks.complete(1)
tasks.sort_by_deadline()
save_tasks(tasks, "tasks.dat")
print(render_table(load_tasks("tasks.dat"), "Work"))
```

An invalid task number or a full list raises `TaskError`.

The module `consoleapps.tasks` also provides:

- `parse_date`
- `days_remaining`
- `due_label`
- `is_overdue`

## What this package does not do

- None of the programs keeps a history or an undo log.
- The student and task files are plain binary records with no locking, so several programs should not change the same file at the same time.