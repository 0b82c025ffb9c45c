# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from tasklist.core.controller import TaskListController
from tasklist.core.state import AppState
from tasklist.tasks.task_store import TaskStore

from .fakes import FakeView


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="Task List",
        log_level="WARNING",
        data_dir=tmp_path,
        tasks_db_path=tmp_path / "tasks.sqlite3",
        sqlite_timeout=5.0,
        sqlite_wal=False,
    )


@pytest.fixture()
def view() -> FakeView:
    return FakeView()


@pytest.fixture()
def state(settings: SimpleNamespace, view: FakeView) -> AppState:
    """
    AppState wired with a real SQLite TaskStore and a recording view.

    The store stays real here because persistence is part of what we test.
    """
    store = TaskStore(settings.tasks_db_path, timeout=settings.sqlite_timeout, wal=False)
    controller = TaskListController(store, view)
    controller.load()
    return AppState(settings=settings, task_store=store, controller=controller)
