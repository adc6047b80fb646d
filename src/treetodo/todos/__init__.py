"""
Todo subsystem.

Components:
- todo_models.py: data structures (TodoItem, TodoList)
- todo_store.py: in-memory tree operations (insert, complete, cascading delete, render)
- todo_codec.py: JSON persistence of a whole TodoList
"""
