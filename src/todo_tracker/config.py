# src/todo_tracker/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Every value has a default; nothing is required to run.
- Tests build their own settings instead of reading the environment.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from .todos.todo_models import Priority

ENV_PREFIX = "TODO"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _default_color() -> bool:
    # NO_COLOR disables, FORCE_COLOR enables, otherwise follow the terminal.
    if os.getenv("NO_COLOR") is not None:
        return False
    if _env_bool("FORCE_COLOR", False):
        return True
    return sys.stdout.isatty()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_to_file: bool

    # ---- Local data paths ----
    data_dir: Path
    db_path: Path

    # ---- Output ----
    color: bool
    default_priority: Priority

    @staticmethod
    def from_env() -> "Settings":
        load_dotenv(find_dotenv(usecwd=True), override=False)

        app_name = _env(_k("APP_NAME"), "todo") or "todo"
        log_level = _env(_k("LOG_LEVEL"), "WARNING")
        log_to_file = _env_bool(_k("LOG_TO_FILE"), True)

        data_dir = _env_path(_k("DATA_DIR"), Path("~/.local/share/todo").expanduser())
        db_path = _env_path(_k("DB_PATH"), data_dir / "todo.db")

        color = _env_bool(_k("COLOR"), _default_color())

        raw_priority = _env(_k("DEFAULT_PRIORITY"), Priority.MEDIUM.value).strip()
        default_priority = (
            Priority(raw_priority) if Priority.is_valid(raw_priority) else Priority.MEDIUM
        )

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_to_file=log_to_file,
            data_dir=data_dir,
            db_path=db_path,
            color=color,
            default_priority=default_priority,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
