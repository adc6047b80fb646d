# src/treetodo/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- resolves the data file from settings,
- loads the persisted TodoList into a TodoStore,
- writes the store back after a mutating command.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..config import get_settings
from ..core.state import AppState
from ..todos.todo_codec import load_todos, save_todos
from ..todos.todo_store import TodoStore

logger = logging.getLogger(__name__)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    data_file = Path(settings.data_file)
    store = TodoStore(load_todos(data_file))
    logger.debug("TodoStore ready file=%s total=%d next_id=%d", data_file, len(store), store.next_id)
    return AppState(settings=settings, store=store, data_file=data_file)


def save_state(state: AppState) -> None:
    """Persist the whole collection. OSError propagates: a failed write is fatal."""
    save_todos(state.store.todo_list, state.data_file)
