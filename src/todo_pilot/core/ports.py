# src/todo_pilot/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps the LLM provider and storage swappable and makes testing easier.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Protocol

ChatMessage = dict[str, Any]
# OpenAI-style chat messages: {"role": "...", "content": "...", ["tool_calls" | "tool_call_id"]: ...}.


class LLMClient(Protocol):
    """Non-streaming chat completion client with function tools."""

    def complete(
        self, messages: list[ChatMessage], tools: list[dict[str, Any]]
    ) -> ChatMessage: ...


class TodoRepo(Protocol):
    def refresh_todos(self) -> list[Any]: ...
    def count_todos(self) -> int: ...

    def add_todos(self, items: Iterable[Mapping[str, Any]]) -> list[str]: ...
    def add_subtasks(self, todo_id: int, subtasks: Iterable[str]) -> list[str]: ...

    def complete_todos(self, ids: Iterable[int]) -> list[str]: ...
    def uncomplete_todos(self, ids: Iterable[int]) -> list[str]: ...
    def complete_subtasks(self, subtask_ids: Iterable[Mapping[str, Any]]) -> list[str]: ...
    def uncomplete_subtasks(self, subtask_ids: Iterable[Mapping[str, Any]]) -> list[str]: ...

    def delete_todos(self, ids: Iterable[int]) -> list[str]: ...
    def delete_subtasks(self, subtask_ids: Iterable[Mapping[str, Any]]) -> list[str]: ...
