# src/todo_pilot/todos/todo_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class Subtask:
    id: int
    todo_id: int
    text: str
    completed: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "text": self.text, "completed": self.completed}


@dataclass(slots=True)
class Todo:
    """
    Top-level todo entry.

    Subtasks are owned by exactly one todo and are kept in id order.
    """

    id: int
    text: str
    completed: bool = False
    subtasks: list[Subtask] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "subtasks": [s.to_dict() for s in self.subtasks],
        }
