# src/todo_tracker/ui/colors.py

"""
ANSI color helpers and due-date formatting.

Everything here is pure: colors are always emitted, and the CLI front end
strips them when the output should stay plain (NO_COLOR, pipes).
"""

from __future__ import annotations

import re
from datetime import date, datetime
from enum import StrEnum
from typing import Any

from ..todos.todo_models import DATE_FORMAT, Priority

ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


class Color(StrEnum):
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    PURPLE = "\033[35m"
    CYAN = "\033[36m"
    GRAY = "\033[90m"
    BOLD = "\033[1m"


_PRIORITY_COLOR = {
    Priority.HIGH: Color.RED,
    Priority.MEDIUM: Color.YELLOW,
    Priority.LOW: Color.GREEN,
}


def colorize(color: str, text: str) -> str:
    """Wrap text in a color and an unconditional reset."""
    return f"{color}{text}{Color.RESET}"


def strip_ansi(text: str) -> str:
    return ANSI_RE.sub("", text)


def visible_width(text: str) -> int:
    return len(strip_ansi(text))


def priority_color(priority: Any) -> Color:
    if not Priority.is_valid(priority):
        return Color.RESET
    return _PRIORITY_COLOR[Priority(priority)]


def _as_day(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value


def format_due_date(due_date: date | datetime | None, today: date | datetime | None = None) -> str:
    """
    Render a due date relative to today.

    overdue / today -> red, tomorrow / within 3 days -> yellow, later -> green.
    """
    if due_date is None:
        return ""

    due = _as_day(due_date)
    ref = _as_day(today) if today is not None else date.today()
    diff = (due - ref).days
    text = due.strftime(DATE_FORMAT)

    if diff < 0:
        return colorize(Color.RED, f"{text} (OVERDUE)")
    if diff == 0:
        return colorize(Color.RED, f"{text} (TODAY)")
    if diff == 1:
        return colorize(Color.YELLOW, f"{text} (tomorrow)")
    if diff <= 3:
        return colorize(Color.YELLOW, text)
    return colorize(Color.GREEN, text)
