# tests/test_todo_codec.py

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from treetodo.todos.todo_codec import from_dict, load_todos, save_todos, to_dict
from treetodo.todos.todo_models import TodoItem, TodoList
from treetodo.todos.todo_store import TodoStore


def _sample() -> TodoList:
    store = TodoStore()
    root = store.add_item("Buy groceries")
    milk = store.add_item("Buy milk ü ✓", root)
    store.add_item("Call mom")
    store.complete_item(milk)
    store.delete_item(3)
    return store.todo_list


def test_save_load_round_trip(tmp_path: Path) -> None:
    original = _sample()
    path = tmp_path / "todos.json"

    save_todos(original, path)
    loaded = load_todos(path)

    assert loaded == original
    assert loaded.next_id == 4


def test_document_layout(tmp_path: Path) -> None:
    path = tmp_path / "todos.json"
    save_todos(_sample(), path)

    data = json.loads(path.read_text("utf-8"))
    assert set(data) == {"items", "next_id"}
    assert data["next_id"] == 4
    assert data["items"]["2"] == {
        "id": 2,
        "text": "Buy milk ü ✓",
        "completed": True,
        "parent_id": 1,
        "created_at": data["items"]["2"]["created_at"],
    }
    assert data["items"]["1"]["parent_id"] is None
    assert not (tmp_path / "todos.json.tmp").exists()


def test_save_creates_parent_dir(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "dir" / "todos.json"
    save_todos(TodoList(), path)
    assert load_todos(path) == TodoList()


def test_save_overwrites(tmp_path: Path) -> None:
    path = tmp_path / "todos.json"
    save_todos(_sample(), path)
    save_todos(TodoList(), path)
    assert load_todos(path) == TodoList(items={}, next_id=1)


def test_load_missing_file(tmp_path: Path) -> None:
    loaded = load_todos(tmp_path / "absent.json")
    assert loaded.items == {}
    assert loaded.next_id == 1


def _doc(parents: dict[int, int | None], next_id: int = 10) -> str:
    items = {
        str(item_id): {
            "id": item_id,
            "text": f"t{item_id}",
            "completed": False,
            "parent_id": parent_id,
            "created_at": "2026-01-01 00:00:00",
        }
        for item_id, parent_id in parents.items()
    }
    return json.dumps({"items": items, "next_id": next_id})


@pytest.mark.parametrize(
    "content",
    [
        _doc({1: 1}),
        _doc({1: 2, 2: 1}),
        _doc({1: None, 2: 3, 3: 4, 4: 2}),
        _doc({2: 99}),
        _doc({1: None, 2: 0}),
        _doc({1: None, 2: -1}),
        pytest.param("[" * 200000 + "]" * 200000, id="deeply-nested-json"),
        "",
        "{not json",
        "[]",
        '{"items": [], "next_id": 1}',
        '{"items": {"1": {"id": 2, "text": "x", "completed": false, "parent_id": null,'
        ' "created_at": "2026-01-01 00:00:00"}}, "next_id": 3}',
        '{"items": {"1": {"id": 1, "text": 5, "completed": false, "parent_id": null,'
        ' "created_at": "2026-01-01 00:00:00"}}, "next_id": 2}',
        '{"items": {}, "next_id": "7"}',
        '{"items": {}, "next_id": 0}',
    ],
)
def test_load_corrupt_file_yields_empty_list(
    tmp_path: Path, caplog: pytest.LogCaptureFixture, content: str
) -> None:
    path = tmp_path / "todos.json"
    path.write_text(content, "utf-8")

    with caplog.at_level(logging.WARNING, logger="treetodo.todos.todo_codec"):
        loaded = load_todos(path)

    assert loaded == TodoList()
    assert "Failed to load todos" in caplog.text


def test_from_dict_raises_next_id_above_stored_ids() -> None:
    data = {
        "items": {
            "5": {
                "id": 5,
                "text": "x",
                "completed": False,
                "parent_id": None,
                "created_at": "2026-01-01 00:00:00",
            }
        },
        "next_id": 2,
    }
    assert from_dict(data).next_id == 6


def test_to_dict_from_dict_round_trip() -> None:
    todo_list = TodoList(
        items={
            1: TodoItem(1, "a", False, None, "2026-01-01 00:00:00"),
            3: TodoItem(3, "b", True, 1, "2026-01-02 12:30:00"),
        },
        next_id=7,
    )
    assert from_dict(to_dict(todo_list)) == todo_list


def test_from_dict_accepts_deep_valid_chain() -> None:
    parents: dict[int, int | None] = {1: None}
    parents.update({i: i - 1 for i in range(2, 2001)})
    loaded = from_dict(json.loads(_doc(parents, next_id=2001)))
    assert len(loaded.items) == 2000
    assert loaded.items[2000].parent_id == 1999


def test_failed_save_removes_temp_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "todos.json"

    def boom(src, dst) -> None:
        raise PermissionError("read-only")

    monkeypatch.setattr("treetodo.todos.todo_codec.os.replace", boom)

    with pytest.raises(PermissionError):
        save_todos(_sample(), path)

    assert not (tmp_path / "todos.json.tmp").exists()
    assert not path.exists()
