# src/todo_pilot/todos/todo_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from .todo_models import Subtask, Todo

logger = logging.getLogger(__name__)


class TodoStore:
    """
    SQLite todo store.

    Two tables:
    - todos: top-level entries
    - subtasks: children of exactly one todo (ON DELETE CASCADE)

    Mutating operations work item by item: a failing item is logged and
    skipped, the rest still go through. Each returns the texts it touched,
    which is what the model gets back as the tool result.

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "todos.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        try:
            total = self.count_todos()
        except sqlite3.Error:
            total = -1
        logger.info("TodoStore ready db=%s total=%s", self._db_path, total)

    def close(self) -> None:
        """Shutdown hook (no persistent connections to close)."""
        return

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")
        # Off by default in SQLite; cascade delete depends on it.
        conn.execute("PRAGMA foreign_keys=ON")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS todos (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    text TEXT NOT NULL,
                    completed INTEGER NOT NULL DEFAULT 0
                )
                """
            )
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS subtasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    todo_id INTEGER REFERENCES todos(id) ON DELETE CASCADE,
                    text TEXT NOT NULL,
                    completed INTEGER NOT NULL DEFAULT 0
                )
                """
            )
            cur.execute("CREATE INDEX IF NOT EXISTS idx_subtasks_todo ON subtasks(todo_id)")
            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _clean_text(text: Any) -> str:
        return str(text or "").strip()

    @staticmethod
    def _subtask_id(ref: Mapping[str, Any]) -> int:
        # Parent todoId is accepted for context only; subtask ids are global.
        return int(ref["subtaskId"])

    def _select_text(self, conn: sqlite3.Connection, table: str, row_id: int) -> str | None:
        cur = conn.execute(f"SELECT text FROM {table} WHERE id = ?", (int(row_id),))
        row = cur.fetchone()
        return str(row["text"]) if row else None

    # ---- public API ----

    def count_todos(self) -> int:
        conn = self._get_conn()
        try:
            (n,) = conn.execute("SELECT COUNT(*) FROM todos").fetchone()
            return int(n)
        finally:
            conn.close()

    def refresh_todos(self) -> list[Todo]:
        """Full snapshot: todos by id, each with its subtasks by id. Returns [] on error."""
        try:
            conn = self._get_conn()
            try:
                todo_rows = conn.execute(
                    "SELECT id, text, completed FROM todos ORDER BY id"
                ).fetchall()
                sub_rows = conn.execute(
                    "SELECT id, todo_id, text, completed FROM subtasks ORDER BY id"
                ).fetchall()
            finally:
                conn.close()
        except sqlite3.Error:
            logger.exception("Error refreshing todos.")
            return []

        todos = {
            int(r["id"]): Todo(id=int(r["id"]), text=str(r["text"]), completed=bool(r["completed"]))
            for r in todo_rows
        }
        for r in sub_rows:
            parent = todos.get(int(r["todo_id"])) if r["todo_id"] is not None else None
            if parent is None:
                continue
            parent.subtasks.append(
                Subtask(
                    id=int(r["id"]),
                    todo_id=parent.id,
                    text=str(r["text"]),
                    completed=bool(r["completed"]),
                )
            )
        return list(todos.values())

    def add_todos(self, items: Iterable[Mapping[str, Any]]) -> list[str]:
        added: list[str] = []

        conn = self._get_conn()
        try:
            for item in items:
                text = ""
                try:
                    text = self._clean_text(item.get("text"))
                    if not text:
                        continue
                    cur = conn.execute("INSERT INTO todos (text) VALUES (?)", (text,))
                    todo_id = cur.lastrowid
                    if todo_id is None:
                        raise RuntimeError("SQLite did not return lastrowid for todos insert")
                    for sub in item.get("subtasks") or []:
                        subtext = self._clean_text(sub)
                        if subtext:
                            conn.execute(
                                "INSERT INTO subtasks (todo_id, text) VALUES (?, ?)",
                                (int(todo_id), subtext),
                            )
                    conn.commit()
                    added.append(text)
                    logger.debug("Todo added id=%s text=%r", todo_id, text)
                except (sqlite3.Error, RuntimeError, AttributeError, TypeError):
                    conn.rollback()
                    logger.exception("Error adding todo %r", text or item)
        finally:
            conn.close()

        return added

    def add_subtasks(self, todo_id: int, subtasks: Iterable[str]) -> list[str]:
        added: list[str] = []

        conn = self._get_conn()
        try:
            for sub in subtasks:
                subtext = self._clean_text(sub)
                if not subtext:
                    continue
                try:
                    conn.execute(
                        "INSERT INTO subtasks (todo_id, text) VALUES (?, ?)",
                        (int(todo_id), subtext),
                    )
                    conn.commit()
                    added.append(subtext)
                except sqlite3.Error:
                    conn.rollback()
                    logger.exception("Error adding subtask %r to todo %s", subtext, todo_id)
        finally:
            conn.close()

        return added

    def _set_todos_completed(self, ids: Iterable[int], completed: bool) -> list[str]:
        verb = "completing" if completed else "uncompleting"
        flag = 1 if completed else 0
        touched: list[str] = []

        conn = self._get_conn()
        try:
            for todo_id in ids:
                try:
                    conn.execute("UPDATE todos SET completed = ? WHERE id = ?", (flag, int(todo_id)))
                    conn.execute(
                        "UPDATE subtasks SET completed = ? WHERE todo_id = ?", (flag, int(todo_id))
                    )
                    conn.commit()
                    text = self._select_text(conn, "todos", todo_id)
                    if text is not None:
                        touched.append(text)
                except (sqlite3.Error, TypeError, ValueError):
                    conn.rollback()
                    logger.exception("Error %s todo %s", verb, todo_id)
        finally:
            conn.close()

        return touched

    def _set_subtasks_completed(
        self, subtask_ids: Iterable[Mapping[str, Any]], completed: bool
    ) -> list[str]:
        verb = "completing" if completed else "uncompleting"
        flag = 1 if completed else 0
        touched: list[str] = []

        conn = self._get_conn()
        try:
            for ref in subtask_ids:
                try:
                    sub_id = self._subtask_id(ref)
                    conn.execute("UPDATE subtasks SET completed = ? WHERE id = ?", (flag, sub_id))
                    conn.commit()
                    text = self._select_text(conn, "subtasks", sub_id)
                    if text is not None:
                        touched.append(text)
                except (sqlite3.Error, KeyError, TypeError, ValueError):
                    conn.rollback()
                    logger.exception("Error %s subtask %s", verb, ref)
        finally:
            conn.close()

        return touched

    def complete_todos(self, ids: Iterable[int]) -> list[str]:
        """Mark todos done and cascade the flag to all of their subtasks."""
        return self._set_todos_completed(ids, True)

    def uncomplete_todos(self, ids: Iterable[int]) -> list[str]:
        """Mark todos not done and cascade the flag to all of their subtasks."""
        return self._set_todos_completed(ids, False)

    def complete_subtasks(self, subtask_ids: Iterable[Mapping[str, Any]]) -> list[str]:
        return self._set_subtasks_completed(subtask_ids, True)

    def uncomplete_subtasks(self, subtask_ids: Iterable[Mapping[str, Any]]) -> list[str]:
        return self._set_subtasks_completed(subtask_ids, False)

    def delete_todos(self, ids: Iterable[int]) -> list[str]:
        """Delete todos by id; their subtasks go with them (cascade)."""
        deleted: list[str] = []

        conn = self._get_conn()
        try:
            for todo_id in ids:
                try:
                    text = self._select_text(conn, "todos", todo_id)
                    if text is None:
                        logger.info("Todo with id %s not found.", todo_id)
                        continue
                    conn.execute("DELETE FROM todos WHERE id = ?", (int(todo_id),))
                    conn.commit()
                    deleted.append(text)
                except (sqlite3.Error, TypeError, ValueError):
                    conn.rollback()
                    logger.exception("Error deleting todo %s", todo_id)
        finally:
            conn.close()

        return deleted

    def delete_subtasks(self, subtask_ids: Iterable[Mapping[str, Any]]) -> list[str]:
        deleted: list[str] = []

        conn = self._get_conn()
        try:
            for ref in subtask_ids:
                try:
                    sub_id = self._subtask_id(ref)
                    text = self._select_text(conn, "subtasks", sub_id)
                    if text is None:
                        logger.info("Subtask with id %s not found.", sub_id)
                        continue
                    conn.execute("DELETE FROM subtasks WHERE id = ?", (sub_id,))
                    conn.commit()
                    deleted.append(text)
                except (sqlite3.Error, KeyError, TypeError, ValueError):
                    conn.rollback()
                    logger.exception("Error deleting subtask %s", ref)
        finally:
            conn.close()

        return deleted
