# tests/conftest.py

from __future__ import annotations

from collections.abc import Iterator
from datetime import date
from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_tracker.core.state import AppState
from todo_tracker.todos.todo_models import Priority
from todo_tracker.todos.todo_store import TodoStore

from .fakes import FakeConfirm

TODAY = date(2025, 6, 15)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI front end.

    We intentionally use a SimpleNamespace rather than reading the environment,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="todo",
        log_level="WARNING",
        log_to_file=False,
        data_dir=tmp_path,
        db_path=tmp_path / "todo.db",
        color=False,
        default_priority=Priority.MEDIUM,
    )


@pytest.fixture()
def store() -> Iterator[TodoStore]:
    """Fresh in-memory store per test."""
    s = TodoStore()
    yield s
    s.close()


@pytest.fixture()
def confirm() -> FakeConfirm:
    return FakeConfirm()


@pytest.fixture()
def state(settings: SimpleNamespace, store: TodoStore, confirm: FakeConfirm) -> AppState:
    """AppState wired with the in-memory store, a scripted prompt and a fixed day."""
    return AppState(settings=settings, store=store, confirm=confirm, today=TODAY)
