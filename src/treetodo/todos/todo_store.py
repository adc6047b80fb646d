# src/treetodo/todos/todo_store.py

from __future__ import annotations

import logging
from datetime import UTC, datetime

from .todo_models import CREATED_AT_FORMAT, TodoItem, TodoList

logger = logging.getLogger(__name__)

EMPTY_MESSAGE = "No todos found. Use 'todo add <text>' to add a new todo."
INDENT = "  "
MARK_DONE = "✓"
MARK_OPEN = "○"


def _now_str() -> str:
    return datetime.now(UTC).strftime(CREATED_AT_FORMAT)


class TodoStore:
    """
    In-memory todo tree.

    Parent existence is NOT checked by add_item(); callers validate with
    has_item() first. Since parent_id must name an existing item at insert
    time and there is no reparent operation, the parent graph is acyclic.

    Traversals (delete/render) use an explicit stack, so nesting depth is not
    bounded by the interpreter recursion limit.
    """

    def __init__(self, todo_list: TodoList | None = None) -> None:
        self._list = todo_list if todo_list is not None else TodoList()

    @property
    def todo_list(self) -> TodoList:
        return self._list

    @property
    def next_id(self) -> int:
        return self._list.next_id

    def __len__(self) -> int:
        return len(self._list.items)

    # ---- lookups ----

    def has_item(self, item_id: int) -> bool:
        return item_id in self._list.items

    def get_item(self, item_id: int) -> TodoItem | None:
        return self._list.items.get(item_id)

    def root_items(self) -> list[TodoItem]:
        items = [it for it in self._list.items.values() if it.parent_id is None]
        items.sort(key=lambda it: it.id)
        return items

    def sub_items(self, parent_id: int) -> list[TodoItem]:
        items = [it for it in self._list.items.values() if it.parent_id == parent_id]
        items.sort(key=lambda it: it.id)
        return items

    # ---- mutations ----

    def add_item(self, text: str, parent_id: int | None = None) -> int:
        item_id = self._list.next_id
        self._list.items[item_id] = TodoItem(
            id=item_id,
            text=text,
            completed=False,
            parent_id=parent_id,
            created_at=_now_str(),
        )
        self._list.next_id += 1
        logger.debug("Todo added id=%s parent_id=%s", item_id, parent_id)
        return item_id

    def complete_item(self, item_id: int) -> bool:
        return self._set_completed(item_id, True)

    def uncomplete_item(self, item_id: int) -> bool:
        return self._set_completed(item_id, False)

    def _set_completed(self, item_id: int, completed: bool) -> bool:
        item = self._list.items.get(item_id)
        if item is None:
            return False
        item.completed = completed
        logger.debug("Todo id=%s completed=%s", item_id, completed)
        return True

    def delete_item(self, item_id: int) -> bool:
        """
        Delete an item together with all of its descendants.

        Returns False (and deletes nothing) if item_id does not exist.
        """
        if item_id not in self._list.items:
            return False

        children: dict[int, list[int]] = {}
        for it in self._list.items.values():
            if it.parent_id is not None:
                children.setdefault(it.parent_id, []).append(it.id)

        # Pre-order collection; removing in reverse drops children before parents.
        order: list[int] = []
        seen: set[int] = set()
        stack = [item_id]
        while stack:
            current = stack.pop()
            if current in seen:
                continue
            seen.add(current)
            order.append(current)
            stack.extend(children.get(current, ()))

        for victim in reversed(order):
            del self._list.items[victim]

        logger.debug("Todo deleted id=%s removed=%d", item_id, len(order))
        return True

    # ---- display ----

    def render(self) -> str:
        roots = self.root_items()
        if not roots:
            return EMPTY_MESSAGE

        children: dict[int, list[TodoItem]] = {}
        for it in self._list.items.values():
            if it.parent_id is not None:
                children.setdefault(it.parent_id, []).append(it)

        lines: list[str] = []
        stack: list[tuple[TodoItem, int]] = [(it, 0) for it in reversed(roots)]
        while stack:
            item, depth = stack.pop()
            mark = MARK_DONE if item.completed else MARK_OPEN
            lines.append(f"{INDENT * depth}[{item.id}] {mark} {item.text}")
            subs = sorted(children.get(item.id, ()), key=lambda it: it.id, reverse=True)
            stack.extend((sub, depth + 1) for sub in subs)

        return "\n".join(lines)
