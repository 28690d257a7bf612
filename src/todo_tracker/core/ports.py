# src/todo_tracker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the command layer.

Commands depend on Protocols instead of concrete implementations,
so tests can swap in an in-memory store and a scripted confirmation.
"""

from datetime import date
from typing import Protocol

from ..todos.todo_models import Priority, Todo


class Confirm(Protocol):
    """Ask the user a yes/no question; True means "go ahead"."""

    def __call__(self, prompt: str) -> bool: ...


class TodoRepo(Protocol):
    def insert(
            self,
            title: str,
            priority: Priority | str,
            category: str = "",
            due_date: date | str | None = None,
    ) -> int: ...

    def get_by_id(self, todo_id: int) -> Todo: ...
    def exists(self, todo_id: int) -> bool: ...

    def list_filtered(
            self,
            show_all: bool = False,
            show_done: bool = False,
            priority: Priority | str | None = None,
            category: str | None = None,
    ) -> list[Todo]: ...

    def set_status(self, todo_id: int, done: bool) -> None: ...

    def update_fields(
            self,
            todo_id: int,
            *,
            title: str | None = None,
            priority: Priority | str | None = None,
            category: str | None = None,
            due_date: date | str | None = None,
            clear_category: bool = False,
            clear_due_date: bool = False,
    ) -> None: ...

    def delete(self, todo_id: int) -> None: ...
    def count(self, completed_only: bool = False) -> int: ...
    def clear(self, all: bool = False) -> int: ...
