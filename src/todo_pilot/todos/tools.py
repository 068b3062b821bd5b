# src/todo_pilot/todos/tools.py

"""
Function tools exposed to the model, and their dispatch onto TodoStore.

Tool names and argument shapes are part of the prompt contract with the
model (camelCase on the wire), so they are kept stable.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any

from ..core.ports import TodoRepo

logger = logging.getLogger(__name__)


class ToolCallError(ValueError):
    """Raised when a tool call cannot be dispatched (unknown name, bad arguments)."""


def _function_tool(name: str, description: str, properties: dict[str, Any]) -> dict[str, Any]:
    return {
        "type": "function",
        "function": {
            "name": name,
            "description": description,
            "strict": True,
            "parameters": {
                "type": "object",
                "properties": properties,
                "required": list(properties),
                "additionalProperties": False,
            },
        },
    }


def _ids_property(description: str) -> dict[str, Any]:
    return {"ids": {"type": "array", "items": {"type": "number"}, "description": description}}


def _subtask_ids_property(description: str) -> dict[str, Any]:
    return {
        "subtaskIds": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "todoId": {"type": "number"},
                    "subtaskId": {"type": "number"},
                },
                "required": ["todoId", "subtaskId"],
                "additionalProperties": False,
            },
            "description": description,
        }
    }


ADD_TODOS_TOOL = _function_tool(
    "addTodos",
    "Add multiple new todo items to the list with subtasks",
    {
        "todos": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "text": {"type": "string", "description": "The title of the todo item"},
                    "subtasks": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "An array of subtasks for the todo item",
                    },
                },
                "required": ["text", "subtasks"],
                "additionalProperties": False,
            },
            "description": "An array of todo items to add",
        }
    },
)

ADD_SUBTASKS_TOOL = _function_tool(
    "addSubtasks",
    "Add subtasks to an existing todo item",
    {
        "todoId": {"type": "number", "description": "The ID of the todo item to add subtasks to"},
        "subtasks": {
            "type": "array",
            "items": {"type": "string"},
            "description": "An array of subtasks to add",
        },
    },
)

COMPLETE_TODOS_TOOL = _function_tool(
    "completeTodos",
    "Mark todo items as completed",
    _ids_property("An array of todo item IDs to mark as completed"),
)

COMPLETE_SUBTASKS_TOOL = _function_tool(
    "completeSubtasks",
    "Mark subtasks as completed",
    _subtask_ids_property(
        "An array of subtask IDs to mark as completed, with their parent todo IDs"
    ),
)

UNCOMPLETE_TODOS_TOOL = _function_tool(
    "uncompleteTodos",
    "Mark todo items as incomplete",
    _ids_property("An array of todo item IDs to mark as incomplete"),
)

UNCOMPLETE_SUBTASKS_TOOL = _function_tool(
    "uncompleteSubtasks",
    "Mark subtasks as incomplete",
    _subtask_ids_property(
        "An array of subtask IDs to mark as incomplete, with their parent todo IDs"
    ),
)

DELETE_TODOS_TOOL = _function_tool(
    "deleteTodos",
    "Delete todo items from the list",
    _ids_property("An array of todo item IDs to delete"),
)

DELETE_SUBTASKS_TOOL = _function_tool(
    "deleteSubtasks",
    "Delete subtasks from todo items",
    _subtask_ids_property("An array of subtask IDs to delete, with their parent todo IDs"),
)

TODO_TOOLS: list[dict[str, Any]] = [
    ADD_TODOS_TOOL,
    ADD_SUBTASKS_TOOL,
    COMPLETE_TODOS_TOOL,
    COMPLETE_SUBTASKS_TOOL,
    UNCOMPLETE_TODOS_TOOL,
    UNCOMPLETE_SUBTASKS_TOOL,
    DELETE_TODOS_TOOL,
    DELETE_SUBTASKS_TOOL,
]


_HANDLERS: dict[str, Callable[[TodoRepo, dict[str, Any]], Any]] = {
    "addTodos": lambda store, a: store.add_todos(a["todos"]),
    "addSubtasks": lambda store, a: store.add_subtasks(int(a["todoId"]), a["subtasks"]),
    "completeTodos": lambda store, a: store.complete_todos(a["ids"]),
    "completeSubtasks": lambda store, a: store.complete_subtasks(a["subtaskIds"]),
    "uncompleteTodos": lambda store, a: store.uncomplete_todos(a["ids"]),
    "uncompleteSubtasks": lambda store, a: store.uncomplete_subtasks(a["subtaskIds"]),
    "deleteTodos": lambda store, a: store.delete_todos(a["ids"]),
    "deleteSubtasks": lambda store, a: store.delete_subtasks(a["subtaskIds"]),
}


def tool_names() -> list[str]:
    return [t["function"]["name"] for t in TODO_TOOLS]


def dispatch_tool_call(store: TodoRepo, name: str, arguments: str | None) -> Any:
    """
    Run one model-requested tool call against the store.

    `arguments` is the raw JSON string from the model.
    """
    handler = _HANDLERS.get(name)
    if handler is None:
        raise ToolCallError(f"Unknown tool: {name}")

    try:
        args = json.loads(arguments or "{}")
    except json.JSONDecodeError as e:
        raise ToolCallError(f"Invalid JSON arguments for {name}: {e}") from e

    if not isinstance(args, dict):
        raise ToolCallError(f"Arguments for {name} must be a JSON object")

    try:
        return handler(store, args)
    except KeyError as e:
        raise ToolCallError(f"Missing argument for {name}: {e.args[0]}") from e
