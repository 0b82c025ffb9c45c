# src/tasklist/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The controller depends on Protocols instead of concrete implementations.
This keeps the store and the front end swappable and makes testing easier.
"""

from collections.abc import Callable, Sequence
from typing import Protocol

from ..tasks.task_models import Prompt, Task

PromptReader = Callable[[Prompt], str | None]
# Shows a prompt and returns the entered text, or None when cancelled.


class TaskRepo(Protocol):
    """
    Transactional task store.

    create/update/delete record pending changes; commit() makes them durable.
    fetch_all() raises FetchError, commit() raises CommitError.
    """

    def fetch_all(self) -> list[Task]: ...
    def create(self, title: str) -> Task: ...
    def update(self, task: Task, title: str) -> Task: ...
    def delete(self, task: Task) -> None: ...
    def commit(self) -> None: ...
    def count_tasks(self) -> int: ...


class TaskListView(Protocol):
    """Rendering surface whose rows mirror the controller's list by position."""

    def reload_all(self, tasks: Sequence[Task]) -> None: ...
    def insert_row(self, index: int, task: Task) -> None: ...
    def reload_row(self, index: int, task: Task) -> None: ...
    def delete_row(self, index: int) -> None: ...
