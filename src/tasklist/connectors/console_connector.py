# src/tasklist/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import datetime

from ..cli.commands import create_task, format_task_table, registry as command_registry
from ..core.state import AppState
from ..tasks.task_models import Prompt, Task

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


class ConsoleTaskView:
    """
    Terminal rendering surface.

    Keeps its own row titles so every row operation can be checked against
    what is actually on screen; the controller must keep them aligned.
    """

    def __init__(self, title: str = "Task List", out: Callable[[str], None] = print) -> None:
        self.title = title
        self.rows: list[str] = []
        self._out = out

    def reload_all(self, tasks: Sequence[Task]) -> None:
        self.rows = [t.title for t in tasks]
        self._out(format_task_table(self.title, tasks))

    def insert_row(self, index: int, task: Task) -> None:
        self.rows.insert(index, task.title)
        self._out(f"  + {index + 1:>3}. {task.title}")

    def reload_row(self, index: int, task: Task) -> None:
        self.rows[index] = task.title
        self._out(f"  ~ {index + 1:>3}. {task.title}")

    def delete_row(self, index: int) -> None:
        title = self.rows.pop(index)
        self._out(f"  - {index + 1:>3}. {title}")


def read_prompt(prompt: Prompt) -> str | None:
    """
    Console version of the two-button text dialog.

    Returns the typed text (Enter on an empty line means Cancel),
    or None on EOF / Ctrl+C.
    """
    print(f"[{prompt.title}] {prompt.message}")
    if prompt.default_text:
        print(f"  Current: {prompt.default_text}")
    print(
        f"  Type a name and press Enter to {prompt.action_label.lower()}; "
        f"empty line = {prompt.cancel_label}."
    )
    try:
        return input(f"{prompt.placeholder}: ")
    except (EOFError, KeyboardInterrupt):
        print()
        return None


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started.")
    _print_ts("[CONSOLE] Type a task to add it. Use /help for commands. Use /exit to quit.\n")

    while True:
        try:
            user_input = input(">>> ")
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        command = user_input.strip()
        if not command:
            continue

        if command.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            with state.lock:
                response = command_registry.handle(state, user_input.lstrip(), ask=read_prompt)
                if response is None:
                    response = create_task(state, user_input)
        except Exception:
            logger.exception("Command handler crashed.")
            response = "Internal error while handling a command."

        _print_ts(response)

    logger.info("Console connector finished.")
