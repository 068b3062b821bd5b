# tests/test_tools.py

from __future__ import annotations

import json

import pytest

from todo_pilot.todos.todo_store import TodoStore
from todo_pilot.todos.tools import TODO_TOOLS, ToolCallError, dispatch_tool_call, tool_names


def test_tool_schemas_are_strict_and_in_declared_order() -> None:
    assert tool_names() == [
        "addTodos",
        "addSubtasks",
        "completeTodos",
        "completeSubtasks",
        "uncompleteTodos",
        "uncompleteSubtasks",
        "deleteTodos",
        "deleteSubtasks",
    ]
    for tool in TODO_TOOLS:
        fn = tool["function"]
        params = fn["parameters"]
        assert tool["type"] == "function"
        assert fn["strict"] is True
        assert params["additionalProperties"] is False
        assert params["required"] == list(params["properties"])


def test_dispatch_routes_to_store(store: TodoStore) -> None:
    added = dispatch_tool_call(
        store, "addTodos", json.dumps({"todos": [{"text": "Walk dog", "subtasks": ["leash"]}]})
    )
    assert added == ["Walk dog"]

    todo = store.refresh_todos()[0]
    sub = todo.subtasks[0]

    assert dispatch_tool_call(store, "addSubtasks", json.dumps({"todoId": todo.id, "subtasks": ["treats"]})) == ["treats"]
    ref = json.dumps({"subtaskIds": [{"todoId": todo.id, "subtaskId": sub.id}]})
    assert dispatch_tool_call(store, "completeSubtasks", ref) == ["leash"]
    assert dispatch_tool_call(store, "uncompleteSubtasks", ref) == ["leash"]
    assert dispatch_tool_call(store, "completeTodos", json.dumps({"ids": [todo.id]})) == ["Walk dog"]
    assert dispatch_tool_call(store, "uncompleteTodos", json.dumps({"ids": [todo.id]})) == ["Walk dog"]
    assert dispatch_tool_call(store, "deleteSubtasks", ref) == ["leash"]
    assert dispatch_tool_call(store, "deleteTodos", json.dumps({"ids": [todo.id]})) == ["Walk dog"]
    assert store.refresh_todos() == []


def test_dispatch_accepts_float_ids(store: TodoStore) -> None:
    # Schemas declare ids as "number", so models may send 1.0.
    store.add_todos([{"text": "T", "subtasks": []}])
    todo_id = store.refresh_todos()[0].id
    assert dispatch_tool_call(store, "completeTodos", json.dumps({"ids": [float(todo_id)]})) == ["T"]


@pytest.mark.parametrize(
    ("name", "arguments", "fragment"),
    [
        ("dropTable", "{}", "Unknown tool"),
        ("addTodos", "{not json", "Invalid JSON"),
        ("addTodos", "[1, 2]", "JSON object"),
        ("completeTodos", "{}", "Missing argument"),
    ],
)
def test_dispatch_rejects_bad_calls(store: TodoStore, name: str, arguments: str, fragment: str) -> None:
    with pytest.raises(ToolCallError, match=fragment):
        dispatch_tool_call(store, name, arguments)
