# todos/todo_models.py

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum
from typing import Any

from ..core.errors import ValidationError

DATE_FORMAT = "%Y-%m-%d"
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class Priority(StrEnum):
    """
    Closed urgency tag.

    Validation is case-sensitive: only the exact lowercase values are accepted.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def is_valid(cls, raw: Any) -> bool:
        return isinstance(raw, str) and raw in cls._value2member_map_

    @classmethod
    def parse(cls, raw: Any) -> Priority:
        if not cls.is_valid(raw):
            raise ValidationError(f"invalid priority {raw!r}: must be low, medium, or high")
        return cls(raw)

    @classmethod
    def from_db(cls, raw: str | None) -> Priority:
        if not raw:
            return cls.MEDIUM
        try:
            return cls(raw)
        except ValueError:
            return cls.MEDIUM


def parse_date(text: str) -> date:
    """Parse a YYYY-MM-DD string; any other shape raises ValidationError."""
    if not isinstance(text, str) or not _DATE_RE.match(text):
        raise ValidationError(f"invalid date format {text!r}: use YYYY-MM-DD")
    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError:
        raise ValidationError(f"invalid date format {text!r}: use YYYY-MM-DD") from None


@dataclass(slots=True)
class Todo:
    id: int
    title: str
    done: bool
    priority: Priority
    category: str
    created_at: datetime
    due_date: date | None = None
