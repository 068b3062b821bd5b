# src/todo_pilot/llm/offline.py

from __future__ import annotations

from typing import Any

from ..core.ports import ChatMessage


class OfflineLLMClient:
    """
    Offline deterministic client used when no API key is configured.

    Never requests tool calls, so the loop ends after one turn and the
    todo list stays untouched.
    """

    def complete(self, messages: list[ChatMessage], tools: list[dict[str, Any]]) -> ChatMessage:
        user_text = ""
        for m in reversed(messages):
            if m.get("role") == "user":
                user_text = str(m.get("content") or "")
                break

        return {
            "role": "assistant",
            "content": (
                "Offline demo mode: no model is configured, so I can't change the list.\n"
                "Set TODO_PILOT_OPENAI_API_KEY (or OPENAI_API_KEY) to enable real responses.\n\n"
                f"You said: {user_text}"
            ),
        }
