# src/treetodo/todos/todo_codec.py

"""
JSON persistence for a TodoList.

The whole collection is read and written in one go:
- load_todos() never fails: a missing/unreadable/corrupt file yields an empty list,
- save_todos() writes a temp file and atomically replaces the target.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from .todo_models import TodoItem, TodoList

logger = logging.getLogger(__name__)


def to_dict(todo_list: TodoList) -> dict[str, Any]:
    items = {
        str(item_id): {
            "id": item.id,
            "text": item.text,
            "completed": item.completed,
            "parent_id": item.parent_id,
            "created_at": item.created_at,
        }
        for item_id, item in sorted(todo_list.items.items())
    }
    return {"items": items, "next_id": todo_list.next_id}


def _req_int(raw: Any, what: str) -> int:
    # bool is an int subclass; reject it explicitly.
    if not isinstance(raw, int) or isinstance(raw, bool):
        raise ValueError(f"{what} must be an integer, got {raw!r}")
    return raw


def _item_from_dict(key: str, raw: Any) -> TodoItem:
    if not isinstance(raw, dict):
        raise ValueError(f"item {key!r} is not an object")

    item_id = _req_int(raw.get("id"), "id")
    if item_id < 1:
        raise ValueError(f"id must be positive, got {item_id}")
    if str(item_id) != key:
        raise ValueError(f"key {key!r} does not match id {item_id}")

    text = raw.get("text")
    if not isinstance(text, str):
        raise ValueError(f"item {item_id}: text must be a string")

    completed = raw.get("completed")
    if not isinstance(completed, bool):
        raise ValueError(f"item {item_id}: completed must be a boolean")

    parent_raw = raw.get("parent_id")
    parent_id = None if parent_raw is None else _req_int(parent_raw, "parent_id")
    if parent_id is not None and parent_id < 1:
        raise ValueError(f"item {item_id}: parent_id must be positive, got {parent_id}")

    created_at = raw.get("created_at")
    if not isinstance(created_at, str):
        raise ValueError(f"item {item_id}: created_at must be a string")

    return TodoItem(
        id=item_id,
        text=text,
        completed=completed,
        parent_id=parent_id,
        created_at=created_at,
    )


def _check_hierarchy(items: dict[int, TodoItem]) -> None:
    """Every parent must exist and no parent chain may loop back on itself."""
    acyclic: set[int] = set()
    for start in items:
        chain: list[int] = []
        on_chain: set[int] = set()
        current: int | None = start
        while current is not None and current not in acyclic:
            if current in on_chain:
                raise ValueError(f"parent cycle through id {current}")
            chain.append(current)
            on_chain.add(current)
            parent_id = items[current].parent_id
            if parent_id is not None and parent_id not in items:
                raise ValueError(f"item {current}: parent_id {parent_id} does not exist")
            current = parent_id
        acyclic.update(chain)


def from_dict(data: Any) -> TodoList:
    """Build a TodoList from decoded JSON. Raises ValueError on a bad shape."""
    if not isinstance(data, dict):
        raise ValueError("document is not an object")

    raw_items = data.get("items")
    if not isinstance(raw_items, dict):
        raise ValueError("items must be an object")

    items: dict[int, TodoItem] = {}
    for key, raw in raw_items.items():
        item = _item_from_dict(str(key), raw)
        items[item.id] = item
    _check_hierarchy(items)

    next_id = _req_int(data.get("next_id"), "next_id")
    if next_id < 1:
        raise ValueError(f"next_id must be >= 1, got {next_id}")

    if items:
        floor = max(items) + 1
        if next_id < floor:
            logger.debug("Raising next_id %s -> %s to stay above stored ids.", next_id, floor)
            next_id = floor

    return TodoList(items=items, next_id=next_id)


def load_todos(path: str | Path) -> TodoList:
    path = Path(path)
    if not path.exists():
        return TodoList()
    try:
        data = json.loads(path.read_text("utf-8"))
        todo_list = from_dict(data)
    except (OSError, UnicodeDecodeError, ValueError, RecursionError) as e:
        logger.warning("Failed to load todos from %s (%s); starting with an empty list.", path, e)
        return TodoList()
    logger.debug("Loaded %d todos from %s", len(todo_list.items), path)
    return todo_list


def save_todos(todo_list: TodoList, path: str | Path) -> None:
    """Overwrite path with the full collection. OSError propagates to the caller."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(path.name + ".tmp")
    try:
        tmp.write_text(json.dumps(to_dict(todo_list), ensure_ascii=False, indent=2), "utf-8")
        os.replace(tmp, path)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise
    logger.debug("Saved %d todos to %s", len(todo_list.items), path)
