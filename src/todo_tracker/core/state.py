# src/todo_tracker/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from .ports import Confirm, TodoRepo


@dataclass
class AppState:
    # Store Settings on the state for easy access in commands.
    settings: object

    store: TodoRepo
    confirm: Confirm

    # Fixed "today" for due-date rendering; None means the real current day.
    today: date | None = None
