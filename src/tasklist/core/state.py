# src/tasklist/core/state.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any

from .controller import TaskListController
from .ports import TaskRepo


@dataclass
class AppState:
    # Settings object (config.Settings or a test SimpleNamespace).
    settings: Any

    task_store: TaskRepo
    controller: TaskListController

    # Serializes command handling so one mutation is in flight at a time.
    lock: threading.Lock = field(default_factory=threading.Lock)
