# src/tasklist/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TypeAlias


class TaskStoreError(Exception):
    """Base class for failures reported by a task store."""


class FetchError(TaskStoreError):
    """Records could not be read from the store."""


class CommitError(TaskStoreError):
    """Pending changes could not be written to the store."""


@dataclass(frozen=True, slots=True)
class Task:
    """
    One to-do item.

    Immutable: a rename produces a new version with the same `id`.
    `id` is assigned by the store and is opaque to everybody else.
    """

    id: str
    title: str
    created_at: float = 0.0
    updated_at: float = 0.0


@dataclass(frozen=True, slots=True)
class CreateIntent:
    """Prompt confirmation appends a new task."""


@dataclass(frozen=True, slots=True)
class RenameIntent:
    """Prompt confirmation retitles the bound task."""

    task_id: str


PromptIntent: TypeAlias = CreateIntent | RenameIntent


PROMPT_MESSAGE = "What do you want to do?"
PROMPT_PLACEHOLDER = "Task Name"
CANCEL_LABEL = "Cancel"


@dataclass(frozen=True, slots=True)
class Prompt:
    title: str
    action_label: str
    intent: PromptIntent
    default_text: str = ""
    message: str = PROMPT_MESSAGE
    placeholder: str = PROMPT_PLACEHOLDER
    cancel_label: str = CANCEL_LABEL

    @classmethod
    def for_add(cls) -> Prompt:
        return cls(title="New Task", action_label="Add", intent=CreateIntent())

    @classmethod
    def for_update(cls, task: Task) -> Prompt:
        return cls(
            title="Update Task",
            action_label="Update",
            intent=RenameIntent(task.id),
            default_text=task.title,
        )

    @property
    def bound_task_id(self) -> str | None:
        return self.intent.task_id if isinstance(self.intent, RenameIntent) else None


@dataclass(slots=True)
class PendingChanges:
    """Unit of work kept by a store between commits."""

    created: dict[str, Task] = field(default_factory=dict)
    updated: dict[str, Task] = field(default_factory=dict)
    deleted: set[str] = field(default_factory=set)

    def __bool__(self) -> bool:
        return bool(self.created or self.updated or self.deleted)

    def clear(self) -> None:
        self.created.clear()
        self.updated.clear()
        self.deleted.clear()
