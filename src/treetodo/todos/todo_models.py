# src/treetodo/todos/todo_models.py

from __future__ import annotations

from dataclasses import dataclass, field

CREATED_AT_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(slots=True)
class TodoItem:
    id: int
    text: str
    completed: bool
    parent_id: int | None
    created_at: str  # UTC, CREATED_AT_FORMAT


@dataclass(slots=True)
class TodoList:
    """
    Flat collection of todos.

    The hierarchy is stored as child -> parent links only (TodoItem.parent_id).
    next_id is never decremented, so ids are not reused after a delete.
    """

    items: dict[int, TodoItem] = field(default_factory=dict)
    next_id: int = 1
