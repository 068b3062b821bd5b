# src/todo_pilot/core/persona.py

from __future__ import annotations

from typing import Final

BASE_SYSTEM_PROMPT: Final[str] = """
You are an AI assistant that helps manage a todo list. You can
add new todos with subtasks, add subtasks to existing todos,
mark todos or subtasks as completed or incomplete, or delete
todos and subtasks. I will provide you with the current state
of the todo list in each interaction. Keep your responses to
the user short and sweet, without unnecessary details.
""".strip()


def get_system_prompt() -> str:
    return BASE_SYSTEM_PROMPT


def initial_messages() -> list[dict[str, str]]:
    """A fresh conversation: just the system prompt."""
    return [{"role": "system", "content": get_system_prompt()}]
