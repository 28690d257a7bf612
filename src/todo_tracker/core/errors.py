# src/todo_tracker/core/errors.py

"""
Error taxonomy shared by every layer.

The message of each exception is user-facing: the CLI front end prints it
verbatim after an "Error:" prefix.
"""

from __future__ import annotations


class TodoError(Exception):
    """Base class for all failures a command can report."""


class ValidationError(TodoError):
    """Bad user input, detected before the store is touched."""


class NotFound(TodoError):
    def __init__(self, todo_id: int) -> None:
        super().__init__(f"todo #{todo_id} not found")
        self.todo_id = todo_id


class StoreError(TodoError):
    """Any failure raised by the underlying SQLite store."""
