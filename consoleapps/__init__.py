"""Interactive terminal tools: an expression calculator, student records and a to-do list."""

__version__ = "0.1.0"