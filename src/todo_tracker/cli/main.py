# src/todo_tracker/cli/main.py

"""
CLI entrypoint.

Parses arguments, initializes logging, opens the store for exactly one
command, prints the command's output and maps failures to exit codes:
- 0: success (including a declined confirmation)
- 1: the command failed (validation, not found, store error)
- 2: usage error
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import is_dataclass, replace
from pathlib import Path
from types import SimpleNamespace
from typing import Any, TextIO

from ..cli.bootstrap import create_initial_state, open_store
from ..cli.commands import registry
from ..config import Settings, get_settings
from ..core.errors import TodoError
from ..core.ports import Confirm
from ..logging_setup import setup_logging
from ..ui.colors import strip_ansi

logger = logging.getLogger(__name__)


def stdin_confirm(prompt: str) -> bool:
    """Ask on stdout, read one line from stdin; only "y"/"Y" confirm."""
    sys.stdout.write(prompt + " ")
    sys.stdout.flush()
    try:
        response = input().strip()
    except EOFError:
        return False
    return response in ("y", "Y")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="todo", description="Simple command-line todo tracker")
    parser.add_argument("--db", type=Path, help="database file (overrides TODO_DB_PATH)")
    sub = parser.add_subparsers(dest="command", metavar="COMMAND")

    def add(name: str) -> argparse.ArgumentParser:
        return sub.add_parser(
            name, help=registry.help_for(name), aliases=registry.aliases_for(name)
        )

    p = add("add")
    p.add_argument("title")
    p.add_argument("-p", "--priority", default="", help="low, medium or high")
    p.add_argument("-c", "--category", default="")
    p.add_argument("-d", "--due", dest="due_date", default="", metavar="YYYY-MM-DD")

    p = add("list")
    p.add_argument("-a", "--all", dest="show_all", action="store_true", help="include completed")
    p.add_argument("--done", dest="show_done", action="store_true", help="completed only")
    p.add_argument("-p", "--priority", default="")
    p.add_argument("-c", "--category", default="")

    for name in ("done", "undone", "show"):
        p = add(name)
        p.add_argument("todo_id", type=int, metavar="ID")

    p = add("delete")
    p.add_argument("todo_id", type=int, metavar="ID")
    p.add_argument("-f", "--force", action="store_true", help="skip confirmation")

    p = add("edit")
    p.add_argument("todo_id", type=int, metavar="ID")
    p.add_argument("-t", "--title", default="")
    p.add_argument("-p", "--priority", default="")
    p.add_argument("-c", "--category", default="")
    p.add_argument("-d", "--due", dest="due_date", default="", metavar="YYYY-MM-DD")
    p.add_argument("--clear-category", action="store_true")
    p.add_argument("--clear-due", dest="clear_due_date", action="store_true")

    p = add("clear")
    p.add_argument("-a", "--all", action="store_true", help="delete every todo, not only completed")
    p.add_argument("-f", "--force", action="store_true", help="skip confirmation")

    add("stats")
    return parser


def _command_kwargs(args: argparse.Namespace) -> dict[str, Any]:
    return {k: v for k, v in vars(args).items() if k not in ("command", "db")}


def _canonical(name: str) -> str:
    for canonical in registry.names():
        if name == canonical or name in registry.aliases_for(canonical):
            return canonical
    return name


def run(
    argv: list[str] | None = None,
    *,
    settings: Settings | Any | None = None,
    confirm: Confirm | None = None,
    out: TextIO | None = None,
    err: TextIO | None = None,
    configure_logging: bool = True,
) -> int:
    out = out if out is not None else sys.stdout
    err = err if err is not None else sys.stderr

    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help(err)
        return 2

    if settings is None:
        settings = get_settings()
    if args.db is not None:
        settings = _with_db_path(settings, args.db)

    if configure_logging:
        level_name = str(getattr(settings, "log_level", "WARNING")).upper()
        console_level = getattr(logging, level_name, logging.WARNING)
        log_dir = settings.data_dir if getattr(settings, "log_to_file", False) else None
        try:
            setup_logging(log_dir=log_dir, console_level=console_level)
        except OSError as exc:
            err.write(f"Error: cannot set up logging in {log_dir}: {exc.strerror or exc}\n")
            return 1

    color = bool(getattr(settings, "color", False))
    command = _canonical(args.command)

    try:
        with open_store(settings) as store:
            state = create_initial_state(
                store=store, confirm=confirm or stdin_confirm, settings=settings
            )
            text = registry.handle(state, command, **_command_kwargs(args))
    except TodoError as exc:
        logger.debug("Command %s failed", command, exc_info=True)
        msg = str(exc) if color else strip_ansi(str(exc))
        err.write(f"Error: {msg}\n")
        return 1

    out.write((text if color else strip_ansi(text)) + "\n")
    return 0


def _with_db_path(settings: Any, db_path: Path) -> Any:
    if is_dataclass(settings):
        return replace(settings, db_path=db_path)
    return SimpleNamespace(**{**vars(settings), "db_path": db_path})


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
