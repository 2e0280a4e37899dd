from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Generator, List, Optional

from .models import Todo
from .repositories import Repository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Cols:
    table: str = "todos"
    id: str = "id"
    title: str = "title"
    description: str = "description"
    completed: str = "completed"
    created_at: str = "created_at"


_COLS = _Cols()


class SQLiteRepository(Repository):
    """
    Lightweight SQLite repository implementing the Repository interface.
    """

    def __init__(self, db_path: str) -> None:
        os.makedirs(os.path.dirname(db_path) or ".", exist_ok=True)
        self._db_path = db_path
        self._init_db()

    @contextmanager
    def _conn(self) -> Generator[sqlite3.Connection, None, None]:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        finally:
            conn.close()

    def _init_db(self) -> None:
        with self._conn() as conn:
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {_COLS.table} (
                    {_COLS.id} INTEGER PRIMARY KEY AUTOINCREMENT,
                    {_COLS.title} TEXT NULL,
                    {_COLS.description} TEXT NULL,
                    {_COLS.completed} INTEGER NOT NULL DEFAULT 0,
                    {_COLS.created_at} TEXT NULL
                )
                """
            )

    def _row_to_todo(self, row: sqlite3.Row) -> Todo:
        created = row[_COLS.created_at]
        return Todo(
            id=int(row[_COLS.id]),
            title=row[_COLS.title],
            description=row[_COLS.description],
            completed=bool(row[_COLS.completed]),
            created_at=datetime.fromisoformat(created) if created is not None else None,
        )

    def _select_one(self, conn: sqlite3.Connection, todo_id: int) -> Optional[sqlite3.Row]:
        return conn.execute(f"SELECT * FROM {_COLS.table} WHERE {_COLS.id} = ?", (todo_id,)).fetchone()

    def find_all(self) -> List[Todo]:
        with self._conn() as conn:
            rows = conn.execute(f"SELECT * FROM {_COLS.table} ORDER BY {_COLS.id} ASC").fetchall()
            return [self._row_to_todo(r) for r in rows]

    def find_by_id(self, todo_id: int) -> Optional[Todo]:
        with self._conn() as conn:
            row = self._select_one(conn, todo_id)
            return self._row_to_todo(row) if row else None

    def save(self, todo: Todo) -> Todo:
        values = (
            todo.title,
            todo.description,
            1 if todo.completed else 0,
            todo.created_at.isoformat() if todo.created_at else None,
        )
        with self._conn() as conn:
            if todo.id is None:
                cur = conn.execute(
                    f"""
                    INSERT INTO {_COLS.table} ({_COLS.title}, {_COLS.description}, {_COLS.completed},
                        {_COLS.created_at})
                    VALUES (?, ?, ?, ?)
                    """,
                    values,
                )
                todo_id = cur.lastrowid
            else:
                # Upsert on the primary key
                conn.execute(
                    f"""
                    INSERT INTO {_COLS.table} ({_COLS.id}, {_COLS.title}, {_COLS.description},
                        {_COLS.completed}, {_COLS.created_at})
                    VALUES (?, ?, ?, ?, ?)
                    ON CONFLICT({_COLS.id}) DO UPDATE SET
                        {_COLS.title} = excluded.{_COLS.title},
                        {_COLS.description} = excluded.{_COLS.description},
                        {_COLS.completed} = excluded.{_COLS.completed},
                        {_COLS.created_at} = excluded.{_COLS.created_at}
                    """,
                    (todo.id, *values),
                )
                todo_id = todo.id
            row = self._select_one(conn, todo_id)
            assert row is not None
            logger.debug("Saved todo id=%s", todo_id)
            return self._row_to_todo(row)

    def delete_by_id(self, todo_id: int) -> None:
        with self._conn() as conn:
            cur = conn.execute(f"DELETE FROM {_COLS.table} WHERE {_COLS.id} = ?", (todo_id,))
            if cur.rowcount > 0:
                logger.debug("Deleted todo id=%s", todo_id)

    def exists_by_id(self, todo_id: int) -> bool:
        with self._conn() as conn:
            row = conn.execute(
                f"SELECT 1 FROM {_COLS.table} WHERE {_COLS.id} = ? LIMIT 1", (todo_id,)
            ).fetchone()
            return row is not None
