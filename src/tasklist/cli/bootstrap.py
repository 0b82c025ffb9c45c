# src/tasklist/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the store, the view and the controller into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..connectors.console_connector import ConsoleTaskView
from ..core.controller import TaskListController
from ..core.ports import TaskListView
from ..core.state import AppState
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, view: TaskListView | None = None) -> AppState:
    """
    Create AppState from the provided settings and load the task list.

    Keeping settings and view injectable makes the app easier to test and
    avoids hidden global config reads. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    store = TaskStore(
        settings.tasks_db_path,
        timeout=getattr(settings, "sqlite_timeout", 30.0),
        wal=getattr(settings, "sqlite_wal", True),
    )
    if view is None:
        view = ConsoleTaskView(title=str(getattr(settings, "app_name", "Task List")))

    controller = TaskListController(store, view)
    controller.load()

    return AppState(settings=settings, task_store=store, controller=controller)
