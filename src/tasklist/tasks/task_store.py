# src/tasklist/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import time
import uuid
from dataclasses import replace
from pathlib import Path

from .task_models import CommitError, FetchError, PendingChanges, Task

logger = logging.getLogger(__name__)


class TaskStore:
    """
    SQLite task store with an explicit unit of work.

    create/update/delete only record pending changes; nothing touches the
    database until commit(), which flushes everything in one transaction.
    A failed commit keeps the pending changes so a later commit can retry them.

    The schema is migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Each method opens its own short-lived SQLite connection.
    """

    def __init__(
        self,
        db_path: str | Path = "tasks.sqlite3",
        *,
        timeout: float = 30.0,
        wal: bool = True,
    ) -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._timeout = float(timeout)
        self._wal = wal
        self._pending = PendingChanges()
        self._ensure_schema()
        try:
            total = self.count_tasks()
        except Exception:
            total = -1
        logger.info("TaskStore ready db=%s total=%s", self._db_path, total)

    @property
    def db_path(self) -> Path:
        return self._db_path

    @property
    def has_pending(self) -> bool:
        return bool(self._pending)

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=self._timeout)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    def _configure_conn(self, conn: sqlite3.Connection) -> None:
        if not self._wal:
            return
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    seq INTEGER PRIMARY KEY AUTOINCREMENT,
                    id TEXT NOT NULL UNIQUE,
                    title TEXT NOT NULL,
                    created_at REAL NOT NULL,
                    updated_at REAL NOT NULL
                )
                """
            )

            cur.execute("PRAGMA table_info(tasks)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE tasks ADD COLUMN {name} {decl}")
                logger.info("TaskStore migration: added column %s", name)

            add_col("title", "TEXT NOT NULL DEFAULT ''")
            add_col("created_at", "REAL NOT NULL DEFAULT 0")
            add_col("updated_at", "REAL NOT NULL DEFAULT 0")

            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=str(row["id"]),
            title=str(row["title"] or ""),
            created_at=float(row["created_at"] or 0.0),
            updated_at=float(row["updated_at"] or 0.0),
        )

    @staticmethod
    def _check_title(title: str) -> str:
        if not title or not title.strip():
            raise ValueError("title is required")
        return title

    # ---- public API ----

    def count_tasks(self) -> int:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT COUNT(*) FROM tasks")
            (n,) = cur.fetchone()
            return int(n)
        finally:
            conn.close()

    def fetch_all(self) -> list[Task]:
        """Committed tasks in insertion order."""
        try:
            conn = self._get_conn()
            try:
                cur = conn.cursor()
                cur.execute("SELECT id, title, created_at, updated_at FROM tasks ORDER BY seq ASC")
                return [self._row_to_task(r) for r in cur.fetchall()]
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise FetchError(f"failed to fetch tasks from {self._db_path}") from exc

    def create(self, title: str) -> Task:
        now = time.time()
        task = Task(id=uuid.uuid4().hex, title=self._check_title(title), created_at=now, updated_at=now)
        self._pending.created[task.id] = task
        logger.debug("Task created (pending) id=%s", task.id)
        return task

    def update(self, task: Task, title: str) -> Task:
        if task.id in self._pending.deleted:
            raise KeyError(task.id)

        new_task = replace(task, title=self._check_title(title), updated_at=time.time())
        if task.id in self._pending.created:
            self._pending.created[task.id] = new_task
        else:
            self._pending.updated[task.id] = new_task
        logger.debug("Task updated (pending) id=%s", task.id)
        return new_task

    def delete(self, task: Task) -> None:
        self._pending.updated.pop(task.id, None)
        if self._pending.created.pop(task.id, None) is not None:
            # Never reached the database; dropping the insert is enough.
            logger.debug("Task delete cancelled pending create id=%s", task.id)
            return
        self._pending.deleted.add(task.id)
        logger.debug("Task deleted (pending) id=%s", task.id)

    def commit(self) -> None:
        """
        Flush pending changes in a single transaction.

        No-op when nothing is pending. On failure the transaction is rolled
        back, pending changes are kept, and CommitError is raised.
        """
        if not self._pending:
            return

        pending = self._pending
        try:
            conn = self._get_conn()
        except sqlite3.Error as exc:
            raise CommitError(f"failed to open {self._db_path}") from exc

        try:
            cur = conn.cursor()
            cur.executemany(
                "INSERT INTO tasks(id, title, created_at, updated_at) VALUES (?, ?, ?, ?)",
                [(t.id, t.title, t.created_at, t.updated_at) for t in pending.created.values()],
            )
            cur.executemany(
                "UPDATE tasks SET title = ?, updated_at = ? WHERE id = ?",
                [(t.title, t.updated_at, t.id) for t in pending.updated.values()],
            )
            cur.executemany(
                "DELETE FROM tasks WHERE id = ?",
                [(task_id,) for task_id in pending.deleted],
            )
            conn.commit()
        except sqlite3.Error as exc:
            with contextlib.suppress(sqlite3.Error):
                conn.rollback()
            raise CommitError(f"failed to commit tasks to {self._db_path}") from exc
        finally:
            conn.close()

        logger.debug(
            "TaskStore commit created=%d updated=%d deleted=%d",
            len(pending.created),
            len(pending.updated),
            len(pending.deleted),
        )
        pending.clear()
