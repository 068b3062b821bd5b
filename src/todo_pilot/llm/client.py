# src/todo_pilot/llm/client.py

from __future__ import annotations

import logging
from typing import Any

import httpx
from openai import OpenAI

from ..core.ports import ChatMessage

logger = logging.getLogger(__name__)


def friendly_llm_error_message(err: Exception) -> str:
    msg = str(err).strip() or "LLM error."
    if "LLM API key is not set" in msg:
        return "LLM is not configured (missing API key). Set TODO_PILOT_OPENAI_API_KEY or OPENAI_API_KEY in .env."
    if "LLM model is not set" in msg:
        return "LLM is not configured (no model). Set TODO_PILOT_LLM_MODEL in .env."
    return msg


def _message_to_dict(message: Any) -> ChatMessage:
    """
    Convert an SDK ChatCompletionMessage into a plain dict we can keep in history
    and send back on the next request.
    """
    out: ChatMessage = {"role": "assistant", "content": getattr(message, "content", None)}

    tool_calls = getattr(message, "tool_calls", None) or []
    if tool_calls:
        out["tool_calls"] = [
            {
                "id": tc.id,
                "type": "function",
                "function": {
                    "name": tc.function.name,
                    "arguments": tc.function.arguments,
                },
            }
            for tc in tool_calls
        ]
    return out


class OpenAIChatClient:
    """
    OpenAI-compatible chat completions client with function tools.

    - Secrets are read from settings at construction, never at import time.
    - One tool call per model turn (parallel_tool_calls=False).
    """

    def __init__(self, settings: Any) -> None:
        api_key = getattr(settings, "openai_api_key", None)
        if not api_key or not str(api_key).strip():
            raise RuntimeError("LLM API key is not set. Set TODO_PILOT_OPENAI_API_KEY in your .env.")

        self._model = str(getattr(settings, "llm_model", "") or "").strip()
        if not self._model:
            raise RuntimeError("LLM model is not set. Set TODO_PILOT_LLM_MODEL in your .env.")

        connect_s = float(getattr(settings, "llm_connect_timeout", 5.0))
        read_s = float(getattr(settings, "llm_read_timeout", 60.0))
        base_url = str(getattr(settings, "openai_base_url", "") or "").strip() or None

        self._client = OpenAI(
            api_key=str(api_key),
            base_url=base_url,
            timeout=httpx.Timeout(connect=connect_s, read=read_s, write=10.0, pool=connect_s),
            max_retries=int(getattr(settings, "llm_max_retries", 2)),
        )

    @property
    def model(self) -> str:
        return self._model

    def complete(self, messages: list[ChatMessage], tools: list[dict[str, Any]]) -> ChatMessage:
        logger.debug("LLM: request model=%s messages=%d", self.model, len(messages))
        response = self._client.chat.completions.create(
            model=self._model,
            messages=messages,  # type: ignore[arg-type]
            tools=tools,  # type: ignore[arg-type]
            tool_choice="auto",
            parallel_tool_calls=False,
        )

        if not response.choices:
            raise RuntimeError(f"Model returned no choices: {self._model}")

        message = _message_to_dict(response.choices[0].message)
        logger.debug(
            "LLM: response model=%s tool_calls=%d",
            self._model,
            len(message.get("tool_calls") or []),
        )
        return message
