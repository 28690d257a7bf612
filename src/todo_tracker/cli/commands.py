# src/todo_tracker/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from ..core.errors import NotFound, ValidationError
from ..core.state import AppState
from ..todos.todo_models import Priority, parse_date
from ..ui.colors import Color, colorize, format_due_date, priority_color
from ..ui.table import Table

CommandHandler = Callable[..., str]

logger = logging.getLogger(__name__)

RULE = "─" * 38
LIST_RULE = "-" * 39
LIST_HEADERS = ["ID", "✓", "Title", "Priority", "Category", "Due"]


class CommandRegistry:
    """Subcommand registry used by the CLI front end (add, list, done, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}
        self._aliases: dict[str, list[str]] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        self._aliases[key] = list(aliases)
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def names(self) -> list[str]:
        return list(self._help)

    def help_for(self, name: str) -> str:
        return self._help[name.lower()]

    def aliases_for(self, name: str) -> list[str]:
        return self._aliases.get(name.lower(), [])

    def handle(self, state: AppState, name: str, **kwargs: Any) -> str:
        """Run the named command and return its output text."""
        handler = self._handlers.get(name.lower())
        if handler is None:
            raise ValidationError(f"unknown command: {name}")
        logger.debug("Running command %s args=%s", name, kwargs)
        return handler(state, **kwargs)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  {name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _validate_priority(raw: str) -> Priority:
    return Priority.parse(raw)


def _validate_due(raw: str) -> str:
    """Return the normalized date text, or "" when no date was given."""
    if not raw:
        return ""
    return parse_date(raw).isoformat()


def cmd_add(
    state: AppState,
    title: str,
    priority: str = "",
    category: str = "",
    due_date: str = "",
) -> str:
    if not title or not title.strip():
        raise ValidationError("title can not be empty")
    prio = _validate_priority(priority or getattr(state.settings, "default_priority", Priority.MEDIUM))
    due = _validate_due(due_date)

    todo_id = state.store.insert(title, prio, category or "", due or None)

    msg = f"{colorize(Color.GREEN, '✓')} Added todo #{todo_id}: {title}"
    if due:
        msg += f" (due {due})"
    return msg


def cmd_list(
    state: AppState,
    show_all: bool = False,
    show_done: bool = False,
    priority: str = "",
    category: str = "",
) -> str:
    if priority:
        _validate_priority(priority)

    todos = state.store.list_filtered(show_all, show_done, priority or None, category or None)

    if show_done:
        heading = "Completed Todos:"
    elif show_all:
        heading = "All Todos:"
    else:
        heading = "Pending Todos:"
    lines = ["", heading, LIST_RULE]

    if not todos:
        lines.append("No todos found")
        return "\n".join(lines)

    table = Table(LIST_HEADERS)
    for t in todos:
        table.add_row(
            [
                str(t.id),
                colorize(Color.GREEN, "✓") if t.done else " ",
                t.title,
                colorize(priority_color(t.priority), t.priority.value),
                t.category,
                format_due_date(t.due_date, state.today),
            ]
        )
    lines.extend(table.render())
    return "\n".join(lines)


def cmd_done(state: AppState, todo_id: int) -> str:
    state.store.set_status(todo_id, True)
    return f"{colorize(Color.GREEN, '✓')} Marked todo #{todo_id} as done"


def cmd_undone(state: AppState, todo_id: int) -> str:
    state.store.set_status(todo_id, False)
    return f"{colorize(Color.BLUE, 'x')} Marked todo #{todo_id} as not done"


def cmd_delete(state: AppState, todo_id: int, force: bool = False) -> str:
    todo = state.store.get_by_id(todo_id)

    if not force and not state.confirm(f'Delete todo #{todo_id}: "{todo.title}"? [y/N]'):
        return "Cancelled"

    state.store.delete(todo_id)
    return f"{colorize(Color.RED, '✗')} Deleted todo #{todo_id}"


def cmd_show(state: AppState, todo_id: int) -> str:
    t = state.store.get_by_id(todo_id)

    status = colorize(Color.GREEN, "Done") if t.done else colorize(Color.YELLOW, "Pending")
    lines = [
        "",
        RULE,
        f"  ID:        {t.id}",
        f"  Title:     {t.title}",
        f"  Status:    {status}",
        f"  Priority:  {colorize(priority_color(t.priority), t.priority.value)}",
    ]
    if t.category:
        lines.append(f"  Category:  {t.category}")
    lines.append(f"  Created:   {t.created_at.strftime('%Y-%m-%d %H:%M')}")
    if t.due_date is not None:
        lines.append(f"  Due:       {format_due_date(t.due_date, state.today)}")
    lines.extend([RULE, ""])
    return "\n".join(lines)


def cmd_edit(
    state: AppState,
    todo_id: int,
    title: str = "",
    priority: str = "",
    category: str = "",
    due_date: str = "",
    clear_category: bool = False,
    clear_due_date: bool = False,
) -> str:
    if not state.store.exists(todo_id):
        raise NotFound(todo_id)

    if title and not title.strip():
        raise ValidationError("title can not be empty")
    if priority:
        _validate_priority(priority)
    due = _validate_due(due_date)

    if not (title or priority or category or due or clear_category or clear_due_date):
        raise ValidationError(
            "nothing to update. Use --title, --priority, --category, --due, "
            "--clear-category or --clear-due"
        )

    state.store.update_fields(
        todo_id,
        title=title or None,
        priority=priority or None,
        category=category or None,
        due_date=due or None,
        clear_category=clear_category,
        clear_due_date=clear_due_date,
    )
    return f"Updated todo #{todo_id}"


def cmd_clear(state: AppState, all: bool = False, force: bool = False) -> str:
    count = state.store.count(completed_only=not all)

    if count == 0:
        return "No todos to clear" if all else "No completed todos to clear"

    if all:
        prompt = f"Delete ALL {count} todos? This cannot be undone. [y/N]"
    else:
        prompt = f"Delete {count} completed todos? [y/N]"

    if not force and not state.confirm(prompt):
        return "Cancelled"

    state.store.clear(all)
    return f"Cleared all {count} todos" if all else f"Cleared {count} completed todos"


def cmd_stats(state: AppState) -> str:
    total = state.store.count()
    done = state.store.count(completed_only=True)
    return f"{total} todos: {total - done} pending, {done} done"


registry.register("add", cmd_add, help_text="Add a new todo.")
registry.register("list", cmd_list, help_text="List todos (pending by default).", aliases=["ls"])
registry.register("done", cmd_done, help_text="Mark a todo as done.")
registry.register("undone", cmd_undone, help_text="Mark a todo as not done.")
registry.register("delete", cmd_delete, help_text="Delete a todo.", aliases=["rm"])
registry.register("show", cmd_show, help_text="Show all details of a todo.")
registry.register("edit", cmd_edit, help_text="Edit title, priority, category or due date.")
registry.register("clear", cmd_clear, help_text="Delete completed (or all) todos.")
registry.register("stats", cmd_stats, help_text="Count pending and completed todos.")
