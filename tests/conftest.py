# tests/conftest.py

from __future__ import annotations

import logging
from pathlib import Path
from types import SimpleNamespace

import pytest

from treetodo.cli.bootstrap import create_initial_state
from treetodo.core.state import AppState
from treetodo.todos.todo_store import TodoStore


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """run() reconfigures the root logger; put pytest's handlers back afterwards."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    for h in handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(level)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and cli.main.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the user's environment and home dir.
    """
    return SimpleNamespace(
        log_level="WARNING",
        log_file=None,
        data_file=tmp_path / "todos.json",
    )


@pytest.fixture()
def store() -> TodoStore:
    return TodoStore()


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    return create_initial_state(settings=settings)
