# tests/fakes.py

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

from todo_pilot.core.ports import ChatMessage


def tool_call(call_id: str, name: str, args: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": call_id,
        "type": "function",
        "function": {"name": name, "arguments": json.dumps(args)},
    }


def assistant_text(text: str) -> ChatMessage:
    return {"role": "assistant", "content": text}


def assistant_tools(*calls: dict[str, Any]) -> ChatMessage:
    return {"role": "assistant", "content": None, "tool_calls": list(calls)}


class FakeLLMClient:
    """
    Scripted LLM client for unit tests.

    - Returns the queued replies in order (an Exception in the queue is raised)
    - Captures every request for assertions
    - Answers "ok" once the script is exhausted
    """

    def __init__(self, replies: Iterable[ChatMessage | Exception] = ()) -> None:
        self.replies: list[ChatMessage | Exception] = list(replies)
        self.calls: list[tuple[list[ChatMessage], list[dict[str, Any]]]] = []

    def complete(self, messages: list[ChatMessage], tools: list[dict[str, Any]]) -> ChatMessage:
        self.calls.append(([dict(m) for m in messages], tools))
        if not self.replies:
            return assistant_text("ok")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply
