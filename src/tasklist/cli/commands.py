# src/tasklist/cli/commands.py

from __future__ import annotations

import inspect
import logging
import re
from collections.abc import Callable, Sequence
from typing import cast

from ..core.ports import PromptReader
from ..core.state import AppState
from ..tasks.task_models import Prompt, Task

CommandHandler2 = Callable[[AppState, list[str]], str]
# Text commands get everything after the command name verbatim, plus the prompt reader.
TextCommandHandler = Callable[[AppState, str, PromptReader | None], str]
CommandHandler = CommandHandler2 | TextCommandHandler

logger = logging.getLogger(__name__)

# First word, one separating whitespace character, then the rest untouched.
_FIRST_WORD_RE = re.compile(r"\s*(\S*)\s?(.*)", re.DOTALL)


def _split_first(text: str) -> tuple[str, str]:
    m = _FIRST_WORD_RE.match(text)
    assert m is not None
    return m.group(1), m.group(2)


class CommandRegistry:
    """Simple slash-command registry used by the console (/add, /del, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        ask: PromptReader | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        raw_name, rest = _split_first(line[1:])
        if not raw_name:
            return "Empty command. Use /help to list available commands."

        name = raw_name.lower()
        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(TextCommandHandler, handler)
            return h3(state, rest, ask)

        h2 = cast(CommandHandler2, handler)
        return h2(state, rest.split())

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  (plain text adds a task; /exit quits)")
        return "\n".join(lines)


registry = CommandRegistry()


def format_task_table(title: str, tasks: Sequence[Task]) -> str:
    lines = [title, "-" * max(len(title), 8)]
    if not tasks:
        lines.append("  (no tasks)")
    for i, task in enumerate(tasks, start=1):
        lines.append(f"{i:>3}. {task.title}")
    return "\n".join(lines)


def _parse_row(state: AppState, raw: str) -> int | str:
    """Turn a 1-based row number into a list index, or return an error message."""
    try:
        row = int(raw)
    except ValueError:
        return f"Not a row number: {raw!r}."
    total = len(state.controller)
    if not 1 <= row <= total:
        if total == 0:
            return "The list is empty."
        return f"No row {row}. Rows are 1..{total}."
    return row - 1


def _read_text(prompt: Prompt, text: str, ask: PromptReader | None) -> str | None:
    if text.strip():
        return text
    if ask is None:
        return None
    return ask(prompt)


def create_task(state: AppState, text: str) -> str:
    """Add + confirm in one step (plain text typed at the console)."""
    controller = state.controller
    task = controller.confirm(controller.begin_add(), text)
    if task is None:
        return "Nothing added (empty task name)."
    return f"Added: {task.title}"


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    app_name = str(getattr(state.settings, "app_name", "Task List"))
    return format_task_table(app_name, state.controller.tasks)


def cmd_status(state: AppState, args: list[str]) -> str:
    store = state.task_store
    db_path = getattr(store, "db_path", None) or getattr(state.settings, "tasks_db_path", "?")
    pending = "yes" if getattr(store, "has_pending", False) else "no"
    try:
        stored = str(store.count_tasks())
    except Exception:
        logger.exception("count_tasks failed.")
        stored = "unavailable"
    return (
        "Status:\n"
        f"  Database: {db_path}\n"
        f"  Rows shown: {len(state.controller)}\n"
        f"  Rows stored: {stored}\n"
        f"  Unsaved changes: {pending}"
    )


def cmd_add(state: AppState, rest: str, ask: PromptReader | None = None) -> str:
    """
    /add         -> show the "New Task" prompt
    /add <text>  -> add directly, text kept as typed
    """
    controller = state.controller
    prompt = controller.begin_add()
    text = _read_text(prompt, rest, ask)
    if text is None:
        return "Usage: /add <task name>." if ask is None else "Cancelled."
    task = controller.confirm(prompt, text)
    if task is None:
        return "Nothing added (empty task name)."
    return f"Added: {task.title}"


def cmd_edit(state: AppState, rest: str, ask: PromptReader | None = None) -> str:
    """
    /edit N         -> show the "Update Task" prompt for row N
    /edit N <text>  -> rename directly, text kept as typed
    """
    raw_row, new_title = _split_first(rest)
    if not raw_row:
        return "Usage: /edit <row> [new name]."

    index = _parse_row(state, raw_row)
    if isinstance(index, str):
        return index

    controller = state.controller
    prompt = controller.begin_update(index)
    text = _read_text(prompt, new_title, ask)
    if text is None:
        return "Usage: /edit <row> <new name>." if ask is None else "Cancelled."
    task = controller.confirm(prompt, text)
    if task is None:
        return "Nothing changed."
    return f"Updated row {index + 1}: {task.title}"


def cmd_del(state: AppState, args: list[str]) -> str:
    """/del N -> delete row N"""
    if not args:
        return "Usage: /del <row>."

    index = _parse_row(state, args[0])
    if isinstance(index, str):
        return index

    task = state.controller.delete(index)
    return f"Deleted: {task.title}"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show all tasks.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add [name].", aliases=["new"])
registry.register(
    "edit", cmd_edit, help_text="Rename a task: /edit <row> [name].", aliases=["update", "rename"]
)
registry.register("del", cmd_del, help_text="Delete a task: /del <row>.", aliases=["rm", "delete"])
registry.register("status", cmd_status, help_text="Show database path and row counts.")
