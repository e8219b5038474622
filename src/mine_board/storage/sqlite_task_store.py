# src/mine_board/storage/sqlite_task_store.py

from __future__ import annotations

import asyncio
import contextlib
import logging
import sqlite3
import time
from collections.abc import Iterable
from pathlib import Path

from ..core.errors import TaskNotFoundError, TaskStoreError
from ..core.models import Category, NewTask, Player, Task

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = ("Construção", "Exploração", "Automação")


class SqliteTaskStore:
    """
    SQLite task store.

    Schema:
    - categories(id, name)
    - tasks(id, title, completed, created_by, created_at, updated_at)
    - task_categories(task_id, category_id)
    - task_players(task_id, name, joined_at)  -- one row per (task, nickname)

    Thread-safety:
    - each method opens its own SQLite connection
    - the async API runs the blocking work in a worker thread
    """

    def __init__(
        self,
        db_path: str | Path = "tasks.sqlite3",
        *,
        seed_categories: Iterable[str] = DEFAULT_CATEGORIES,
    ) -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        self._seed_categories(list(seed_categories))
        try:
            total = self._count_tasks()
        except Exception:
            total = -1
        logger.info("SqliteTaskStore ready db=%s total=%s", self._db_path, total)

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(Exception):
            conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA foreign_keys=ON")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS categories (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL UNIQUE
                )
                """
            )
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    completed INTEGER NOT NULL DEFAULT 0,
                    created_by TEXT NOT NULL,
                    created_at REAL NOT NULL,
                    updated_at REAL NOT NULL
                )
                """
            )
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS task_categories (
                    task_id INTEGER NOT NULL REFERENCES tasks(id) ON DELETE CASCADE,
                    category_id INTEGER NOT NULL REFERENCES categories(id),
                    PRIMARY KEY (task_id, category_id)
                )
                """
            )
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS task_players (
                    task_id INTEGER NOT NULL REFERENCES tasks(id) ON DELETE CASCADE,
                    name TEXT NOT NULL,
                    joined_at REAL NOT NULL,
                    PRIMARY KEY (task_id, name)
                )
                """
            )

            # Migrations (safe): add missing columns on older databases.
            cur.execute("PRAGMA table_info(tasks)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE tasks ADD COLUMN {name} {decl}")
                logger.info("SqliteTaskStore migration: added column %s", name)

            add_col("completed", "INTEGER NOT NULL DEFAULT 0")
            add_col("created_by", "TEXT NOT NULL DEFAULT ''")
            add_col("created_at", "REAL NOT NULL DEFAULT 0")
            add_col("updated_at", "REAL NOT NULL DEFAULT 0")

            cur.execute("CREATE INDEX IF NOT EXISTS idx_task_categories_cat ON task_categories(category_id)")
            conn.commit()
        finally:
            conn.close()

    def _seed_categories(self, names: list[str]) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT COUNT(*) FROM categories")
            (n,) = cur.fetchone()
            if int(n) > 0 or not names:
                return
            cur.executemany("INSERT INTO categories(name) VALUES (?)", [(name,) for name in names])
            conn.commit()
            logger.info("Seeded %d categories", len(names))
        finally:
            conn.close()

    def _count_tasks(self) -> int:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT COUNT(*) FROM tasks")
            (n,) = cur.fetchone()
            return int(n)
        finally:
            conn.close()

    @staticmethod
    def _task_exists(cur: sqlite3.Cursor, task_id: int) -> bool:
        cur.execute("SELECT 1 FROM tasks WHERE id = ?", (int(task_id),))
        return cur.fetchone() is not None

    def _load_tasks(self, conn: sqlite3.Connection, task_ids: list[int] | None = None) -> list[Task]:
        cur = conn.cursor()
        if task_ids is None:
            cur.execute("SELECT * FROM tasks ORDER BY created_at ASC, id ASC")
        else:
            placeholders = ",".join("?" for _ in task_ids)
            cur.execute(f"SELECT * FROM tasks WHERE id IN ({placeholders}) ORDER BY id ASC", task_ids)
        rows = cur.fetchall()

        cats: dict[int, list[Category]] = {}
        cur.execute(
            """
            SELECT tc.task_id, c.id, c.name
            FROM task_categories tc
            JOIN categories c ON c.id = tc.category_id
            ORDER BY c.id ASC
            """
        )
        for r in cur.fetchall():
            cats.setdefault(int(r["task_id"]), []).append(Category(id=int(r["id"]), name=str(r["name"])))

        players: dict[int, list[Player]] = {}
        cur.execute("SELECT task_id, name FROM task_players ORDER BY joined_at ASC, rowid ASC")
        for r in cur.fetchall():
            players.setdefault(int(r["task_id"]), []).append(Player(name=str(r["name"])))

        out: list[Task] = []
        for row in rows:
            task_id = int(row["id"])
            out.append(
                Task(
                    id=task_id,
                    title=str(row["title"] or ""),
                    completed=bool(row["completed"]),
                    created_by=str(row["created_by"] or ""),
                    categories=tuple(cats.get(task_id, ())),
                    players=tuple(players.get(task_id, ())),
                )
            )
        return out

    # ---- blocking implementations ----

    def _get_all_sync(self) -> list[Task]:
        conn = self._get_conn()
        try:
            return self._load_tasks(conn)
        finally:
            conn.close()

    def _list_categories_sync(self) -> list[Category]:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT id, name FROM categories ORDER BY id ASC")
            return [Category(id=int(r["id"]), name=str(r["name"])) for r in cur.fetchall()]
        finally:
            conn.close()

    def _create_sync(self, new_task: NewTask) -> Task:
        title = (new_task.title or "").strip()
        if not title:
            raise TaskStoreError("title is required")
        if not new_task.created_by:
            raise TaskStoreError("created_by is required")

        now = time.time()
        conn = self._get_conn()
        try:
            cur = conn.cursor()

            category_ids = sorted({c.id for c in new_task.categories})
            if category_ids:
                placeholders = ",".join("?" for _ in category_ids)
                cur.execute(f"SELECT id FROM categories WHERE id IN ({placeholders})", category_ids)
                known = {int(r["id"]) for r in cur.fetchall()}
                unknown = [cid for cid in category_ids if cid not in known]
                if unknown:
                    raise TaskStoreError(f"unknown category ids: {unknown}")

            cur.execute(
                """
                INSERT INTO tasks(title, completed, created_by, created_at, updated_at)
                VALUES (?, 0, ?, ?, ?)
                """,
                (title, new_task.created_by, now, now),
            )
            rowid = cur.lastrowid
            if rowid is None:
                raise RuntimeError("SQLite did not return lastrowid for tasks insert")
            task_id = int(rowid)

            cur.executemany(
                "INSERT INTO task_categories(task_id, category_id) VALUES (?, ?)",
                [(task_id, cid) for cid in category_ids],
            )
            conn.commit()
            logger.debug("Task added id=%s title=%r by=%s", task_id, title, new_task.created_by)

            return self._load_tasks(conn, [task_id])[0]
        finally:
            conn.close()

    def _toggle_completion_sync(self, task_id: int) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                "UPDATE tasks SET completed = 1 - completed, updated_at = ? WHERE id = ?",
                (time.time(), int(task_id)),
            )
            if cur.rowcount != 1:
                raise TaskNotFoundError(task_id)
            conn.commit()
        finally:
            conn.close()

    def _toggle_assignment_sync(self, nickname: str, task_id: int) -> None:
        if not nickname:
            raise TaskStoreError("nickname is required")

        conn = self._get_conn()
        try:
            cur = conn.cursor()
            if not self._task_exists(cur, task_id):
                raise TaskNotFoundError(task_id)

            cur.execute(
                "DELETE FROM task_players WHERE task_id = ? AND name = ?",
                (int(task_id), nickname),
            )
            if cur.rowcount == 0:
                cur.execute(
                    "INSERT INTO task_players(task_id, name, joined_at) VALUES (?, ?, ?)",
                    (int(task_id), nickname, time.time()),
                )
                logger.debug("Player %s joined task_id=%s", nickname, task_id)
            else:
                logger.debug("Player %s left task_id=%s", nickname, task_id)

            cur.execute("UPDATE tasks SET updated_at = ? WHERE id = ?", (time.time(), int(task_id)))
            conn.commit()
        finally:
            conn.close()

    # ---- public API (TaskRepo) ----

    async def get_all(self) -> list[Task]:
        return await asyncio.to_thread(self._get_all_sync)

    async def list_categories(self) -> list[Category]:
        return await asyncio.to_thread(self._list_categories_sync)

    async def create(self, new_task: NewTask) -> Task:
        return await asyncio.to_thread(self._create_sync, new_task)

    async def toggle_completion(self, task_id: int) -> None:
        await asyncio.to_thread(self._toggle_completion_sync, task_id)

    async def toggle_assignment(self, nickname: str, task_id: int) -> None:
        await asyncio.to_thread(self._toggle_assignment_sync, nickname, task_id)

    def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return
