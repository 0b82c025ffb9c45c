# src/tasklist/core/controller.py

"""
Task list controller.

Keeps three things in agreement after every user action:
- the in-memory list (positional cache of store records),
- the rendered rows,
- the durable store.

Commit policy is best-effort: a CommitError is logged and the list/rows are
NOT rolled back. The store keeps the unflushed changes pending, so the next
successful commit writes them.
"""

from __future__ import annotations

import logging
from typing import assert_never

from ..tasks.task_models import (
    CommitError,
    CreateIntent,
    FetchError,
    Prompt,
    RenameIntent,
    Task,
)
from .ports import TaskListView, TaskRepo

logger = logging.getLogger(__name__)


class TaskListController:
    def __init__(self, store: TaskRepo, view: TaskListView) -> None:
        self._store = store
        self._view = view
        self._tasks: list[Task] = []

    # ---- queries ----

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def task_at(self, row_index: int) -> Task:
        self._check_index(row_index)
        return self._tasks[row_index]

    def index_of(self, task_id: str) -> int | None:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        return None

    def _check_index(self, row_index: int) -> None:
        if not 0 <= row_index < len(self._tasks):
            raise IndexError(f"row index {row_index} out of range (rows={len(self._tasks)})")

    # ---- lifecycle ----

    def load(self) -> None:
        """Replace the list with the store's records and re-render everything."""
        try:
            tasks = self._store.fetch_all()
        except FetchError:
            logger.exception("Failed to fetch tasks.")
            tasks = []
        self._tasks = list(tasks)
        self._view.reload_all(self.tasks)
        logger.info("Loaded %d tasks.", len(self._tasks))

    # ---- prompt flow ----

    def begin_add(self) -> Prompt:
        return Prompt.for_add()

    def begin_update(self, row_index: int) -> Prompt:
        return Prompt.for_update(self.task_at(row_index))

    def confirm(self, prompt: Prompt, text: str | None) -> Task | None:
        """
        Apply a confirmed prompt.

        Blank text closes the prompt without touching the list or the store;
        any other text is stored as typed.
        Returns the created/renamed task, or None when nothing changed.
        """
        if text is None or not text.strip():
            logger.debug("Prompt confirmed with empty text; ignored.")
            return None

        intent = prompt.intent
        if isinstance(intent, CreateIntent):
            return self._create(text)
        if isinstance(intent, RenameIntent):
            return self._rename(intent.task_id, text)
        assert_never(intent)

    def _create(self, title: str) -> Task:
        task = self._store.create(title)
        self._tasks.append(task)
        self._view.insert_row(len(self._tasks) - 1, task)
        logger.info("Task added id=%s", task.id)
        self._commit()
        return task

    def _rename(self, task_id: str, title: str) -> Task | None:
        index = self.index_of(task_id)
        if index is None:
            logger.warning("Rename ignored: task id=%s is no longer listed.", task_id)
            return None

        task = self._store.update(self._tasks[index], title)
        self._tasks[index] = task
        self._view.reload_row(index, task)
        logger.info("Task renamed id=%s row=%d", task.id, index)
        self._commit()
        return task

    def delete(self, row_index: int) -> Task:
        self._check_index(row_index)
        task = self._tasks[row_index]
        self._store.delete(task)
        del self._tasks[row_index]
        self._view.delete_row(row_index)
        logger.info("Task deleted id=%s row=%d", task.id, row_index)
        self._commit()
        return task

    def _commit(self) -> None:
        try:
            self._store.commit()
        except CommitError:
            logger.exception("Failed to commit task changes; keeping displayed state.")
