# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file
in the working directory). Nothing here is imported by the application.

This file exists to make the repo self-documenting even without opening the source.
"""

ENV_VARS = {
    # App / logging
    "TODO_APP_NAME": "App display name (default: todo).",
    "TODO_LOG_LEVEL": "Console logging level (default: WARNING).",
    "TODO_LOG_TO_FILE": "Write a debug log to <data_dir>/todo.log (true/false, default: true).",
    # Paths
    "TODO_DATA_DIR": "Local data directory (default: ~/.local/share/todo).",
    "TODO_DB_PATH": "SQLite database path (default: <data_dir>/todo.db).",
    # Output
    "TODO_COLOR": "Force ANSI colors on/off (default: on for a TTY).",
    "NO_COLOR": "Disable colors when set (any value).",
    "FORCE_COLOR": "Enable colors even when stdout is not a TTY.",
    "TODO_DEFAULT_PRIORITY": "Priority used by `todo add` without -p (low/medium/high).",
}
