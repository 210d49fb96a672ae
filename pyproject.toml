[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "consoleapps"
version = "0.1.0"
description = "Small interactive terminal tools: an expression calculator, a student record keeper and a to-do list."
requires-python = ">=3.10"
dependencies = []
keywords = ["calculator", "terminal", "todo", "student-records", "cli"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
consoleapps-calc = "consoleapps.calculator:main"
consoleapps-students = "consoleapps.students:main"
consoleapps-todo = "consoleapps.todo_cli:main"

[tool.hatch.build.targets.wheel]
packages = ["consoleapps"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
