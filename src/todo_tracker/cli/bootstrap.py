# src/todo_tracker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local data directory exists,
- wires the concrete store and confirmation prompt into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import Confirm
from ..core.state import AppState
from ..todos.todo_store import TodoStore, ensure_dir

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    ensure_dir(settings.data_dir)
    ensure_dir(settings.db_path.parent)


def open_store(settings=None) -> TodoStore:
    """Open the configured database; the caller owns (and must close) the store."""
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)
    return TodoStore(settings.db_path)


def create_initial_state(*, store: TodoStore, confirm: Confirm, settings=None) -> AppState:
    """
    Create AppState around an already opened store.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    logger.debug("AppState created db=%s", getattr(settings, "db_path", None))
    return AppState(settings=settings, store=store, confirm=confirm)
