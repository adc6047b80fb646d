# src/treetodo/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..todos.todo_store import TodoStore


@dataclass
class AppState:
    # Settings object (config.Settings or a test stand-in with the same attributes).
    settings: object

    store: TodoStore
    data_file: Path
