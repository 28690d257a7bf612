# todos/todo_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
from collections.abc import Iterator
from datetime import date, datetime
from pathlib import Path
from typing import Any

from ..core.errors import NotFound, StoreError, ValidationError
from .todo_models import DATE_FORMAT, Priority, Todo, parse_date

logger = logging.getLogger(__name__)

MEMORY_DB = ":memory:"


def ensure_dir(path: Path) -> None:
    """Create a directory (and parents); OS failures surface as StoreError."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StoreError(f"cannot create directory {path}: {exc.strerror or exc}") from exc


class TodoStore:
    """
    SQLite todo store.

    The schema is intentionally simple and migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Connection ownership:
    - one connection per store, opened in __init__ and released by close()
    - ":memory:" gives every store instance its own private database
    """

    def __init__(self, db_path: str | Path = MEMORY_DB) -> None:
        self._db_path = str(db_path)
        if self._db_path != MEMORY_DB:
            ensure_dir(Path(self._db_path).parent)
        try:
            self._conn = sqlite3.connect(self._db_path)
        except sqlite3.Error as exc:
            raise StoreError(f"cannot open database {self._db_path}: {exc}") from exc
        self._conn.row_factory = sqlite3.Row
        try:
            self._ensure_schema()
        except StoreError:
            self._conn.close()
            raise
        logger.info("TodoStore ready db=%s total=%s", self._db_path, self.count())

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> TodoStore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ---- low-level helpers ----

    @contextlib.contextmanager
    def _guard(self, op: str) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor; commit on success, translate sqlite errors to StoreError."""
        try:
            cur = self._conn.cursor()
            yield cur
            self._conn.commit()
        except sqlite3.Error as exc:
            with contextlib.suppress(sqlite3.Error):
                self._conn.rollback()
            logger.debug("TodoStore %s failed", op, exc_info=True)
            raise StoreError(f"{op} failed: {exc}") from exc

    def _ensure_schema(self) -> None:
        with self._guard("schema migration") as cur:
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS todos (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    done INTEGER DEFAULT 0,
                    priority TEXT DEFAULT 'medium',
                    category TEXT DEFAULT '',
                    created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
                    due_date DATETIME
                )
                """
            )

            # Older databases predate priority/category/due dates.
            cur.execute("PRAGMA table_info(todos)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE todos ADD COLUMN {name} {decl}")
                logger.info("TodoStore migration: added column %s", name)

            add_col("done", "INTEGER DEFAULT 0")
            add_col("priority", "TEXT DEFAULT 'medium'")
            add_col("category", "TEXT DEFAULT ''")
            add_col("due_date", "DATETIME")

            cur.execute("CREATE INDEX IF NOT EXISTS idx_todos_done ON todos(done)")

    @staticmethod
    def _due_to_db(due_date: date | str | None) -> str | None:
        if due_date is None or due_date == "":
            return None
        if isinstance(due_date, str):
            due_date = parse_date(due_date)
        return due_date.strftime(DATE_FORMAT)

    @staticmethod
    def _db_to_due(raw: Any) -> date | None:
        if raw is None or raw == "":
            return None
        # Accept both "2025-12-31" and full timestamps written by other tools.
        return date.fromisoformat(str(raw)[:10])

    @staticmethod
    def _db_to_created(raw: Any) -> datetime:
        s = str(raw or "")
        try:
            return datetime.fromisoformat(s)
        except ValueError:
            return datetime.fromisoformat(s[:19])

    def _row_to_todo(self, row: sqlite3.Row) -> Todo:
        try:
            created_at = self._db_to_created(row["created_at"])
            due_date = self._db_to_due(row["due_date"])
        except ValueError as exc:
            raise StoreError(f"todo #{row['id']} has a malformed date: {exc}") from exc
        return Todo(
            id=int(row["id"]),
            title=str(row["title"]),
            done=bool(row["done"]),
            priority=Priority.from_db(row["priority"]),
            category=str(row["category"] or ""),
            created_at=created_at,
            due_date=due_date,
        )

    # ---- public API ----

    def insert(
        self,
        title: str,
        priority: Priority | str = Priority.MEDIUM,
        category: str = "",
        due_date: date | str | None = None,
    ) -> int:
        if not title or not title.strip():
            raise ValidationError("title can not be empty")
        prio = Priority.parse(priority)
        due = self._due_to_db(due_date)

        with self._guard("insert") as cur:
            cur.execute(
                "INSERT INTO todos (title, priority, category, due_date) VALUES (?, ?, ?, ?)",
                (title, prio.value, category or "", due),
            )
            rowid = cur.lastrowid
        if rowid is None:
            raise StoreError("SQLite did not return lastrowid for todos insert")
        todo_id = int(rowid)
        logger.debug("Todo added id=%s priority=%s category=%r due=%s", todo_id, prio, category, due)
        return todo_id

    def get_by_id(self, todo_id: int) -> Todo:
        with self._guard("get") as cur:
            cur.execute(
                """
                SELECT id, title, done, priority, category, created_at, due_date
                FROM todos
                WHERE id = ?
                """,
                (int(todo_id),),
            )
            row = cur.fetchone()
        if row is None:
            raise NotFound(todo_id)
        return self._row_to_todo(row)

    def exists(self, todo_id: int) -> bool:
        with self._guard("exists") as cur:
            cur.execute("SELECT EXISTS(SELECT 1 FROM todos WHERE id = ?)", (int(todo_id),))
            (found,) = cur.fetchone()
        return bool(found)

    def list_filtered(
        self,
        show_all: bool = False,
        show_done: bool = False,
        priority: Priority | str | None = None,
        category: str | None = None,
    ) -> list[Todo]:
        """
        Return todos matching every given filter, in id order.

        Status filter:
        - show_done           -> completed only
        - not show_all        -> pending only (default)
        - show_all            -> no status restriction
        Empty priority/category values add no condition.
        """
        conditions: list[str] = []
        params: list[Any] = []

        if show_done:
            conditions.append("done = 1")
        elif not show_all:
            conditions.append("done = 0")

        if priority:
            conditions.append("priority = ?")
            params.append(str(priority))

        if category:
            conditions.append("category = ?")
            params.append(category)

        sql = "SELECT id, title, done, priority, category, created_at, due_date FROM todos"
        if conditions:
            sql += " WHERE " + " AND ".join(conditions)
        sql += " ORDER BY id ASC"

        with self._guard("list") as cur:
            cur.execute(sql, params)
            return [self._row_to_todo(r) for r in cur.fetchall()]

    def set_status(self, todo_id: int, done: bool) -> None:
        with self._guard("status update") as cur:
            cur.execute("UPDATE todos SET done = ? WHERE id = ?", (1 if done else 0, int(todo_id)))
            affected = cur.rowcount
        if affected == 0:
            raise NotFound(todo_id)
        logger.debug("Todo id=%s done=%s", todo_id, done)

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
    ) -> None:
        """
        Partial update: empty or None arguments leave the column untouched.

        Use clear_category / clear_due_date to reset those columns explicitly.
        """
        if title and not title.strip():
            raise ValidationError("title can not be empty")

        fields: list[str] = []
        params: list[Any] = []

        if title:
            fields.append("title = ?")
            params.append(title)

        if priority:
            fields.append("priority = ?")
            params.append(Priority.parse(priority).value)

        if clear_category:
            fields.append("category = ?")
            params.append("")
        elif category:
            fields.append("category = ?")
            params.append(category)

        if clear_due_date:
            fields.append("due_date = NULL")
        elif due_date:
            fields.append("due_date = ?")
            params.append(self._due_to_db(due_date))

        if not fields:
            return

        params.append(int(todo_id))
        sql = f"UPDATE todos SET {', '.join(fields)} WHERE id = ?"

        with self._guard("update") as cur:
            cur.execute(sql, params)
        logger.debug("Todo id=%s updated columns=%d", todo_id, len(fields))

    def delete(self, todo_id: int) -> None:
        with self._guard("delete") as cur:
            cur.execute("DELETE FROM todos WHERE id = ?", (int(todo_id),))
            logger.debug("Todo delete id=%s rows=%s", todo_id, cur.rowcount)

    def count(self, completed_only: bool = False) -> int:
        sql = "SELECT COUNT(*) FROM todos"
        if completed_only:
            sql += " WHERE done = 1"
        with self._guard("count") as cur:
            cur.execute(sql)
            (n,) = cur.fetchone()
        return int(n)

    def clear(self, all: bool = False) -> int:
        """Delete every todo (all=True) or only completed ones; return rows removed."""
        sql = "DELETE FROM todos"
        if not all:
            sql += " WHERE done = 1"
        with self._guard("clear") as cur:
            cur.execute(sql)
            removed = cur.rowcount
        logger.info("Cleared %s todos (all=%s)", removed, all)
        return int(removed)
