# src/todo_pilot/core/chat.py

"""
Core chat orchestration.

One user message drives a tool-call loop:
- send history + a fresh todo snapshot to the model,
- run any requested tool calls against the store, in declared order,
- append one tool result per call (keyed by tool_call_id),
- refresh the snapshot once per model turn,
- stop when the model answers without tool calls or the remote call fails.

Key invariants:
- the todo snapshot is injected as a trailing system message on every call
  and is never stored in history,
- every assistant tool call gets exactly one tool message before the next
  model call,
- state.is_loading is cleared even when the loop raises.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import Any

from ..todos.tools import TODO_TOOLS, ToolCallError, dispatch_tool_call, tool_names
from .ports import ChatMessage, TodoRepo
from .state import AppState

logger = logging.getLogger(__name__)

NO_TODOS_TEXT = "No todos currently."
USE_IDS_HINT = "Please use the todo IDs when referring to specific todos."


def _js_bool(value: Any) -> str:
    return "true" if value else "false"


def _format_subtask(st: Any) -> str:
    return (
        f'{{ID: {getattr(st, "id", "?")}, Text: "{getattr(st, "text", "")}", '
        f"Completed: {_js_bool(getattr(st, 'completed', False))}}}"
    )


def _format_todo_line(t: Any) -> str:
    subtasks = ", ".join(_format_subtask(st) for st in getattr(t, "subtasks", None) or [])
    return (
        f'ID: {getattr(t, "id", "?")}, Text: "{getattr(t, "text", "")}", '
        f"Completed: {_js_bool(getattr(t, 'completed', False))}, Subtasks: [{subtasks}]"
    )


def build_todo_context(todos: Iterable[Any]) -> ChatMessage:
    """System message describing the current list, so the model can refer to ids."""
    todos = list(todos)
    if not todos:
        return {"role": "system", "content": f"Current todo list:\n{NO_TODOS_TEXT}"}

    body = "\n".join(_format_todo_line(t) for t in todos)
    return {"role": "system", "content": f"Current todo list:\n{body}\n\n{USE_IDS_HINT}"}


def visible_messages(messages: Iterable[ChatMessage]) -> list[ChatMessage]:
    """Messages shown in the chat pane: user turns and assistant turns with text."""
    out: list[ChatMessage] = []
    for m in messages:
        role = m.get("role")
        if role == "user" or (role == "assistant" and m.get("content")):
            out.append({"role": role, "content": m.get("content") or ""})
    return out


def _run_tool_call(store: TodoRepo, call: dict[str, Any]) -> ChatMessage:
    fn = call.get("function") or {}
    name = str(fn.get("name") or "")
    call_id = call.get("id")
    logger.info("Tool call id=%s name=%s args=%s", call_id, name, fn.get("arguments"))

    try:
        result: Any = dispatch_tool_call(store, name, fn.get("arguments"))
    except ToolCallError as e:
        logger.warning("Tool call id=%s rejected: %s", call_id, e)
        result = {"error": str(e)}
    except Exception as e:
        logger.exception("Tool call id=%s name=%s failed.", call_id, name)
        result = {"error": f"{name} failed: {e.__class__.__name__}"}

    return {"role": "tool", "content": json.dumps(result), "tool_call_id": call_id}


def run_tool_loop(state: AppState, history: list[ChatMessage]) -> int:
    """
    Drive model turns until a plain answer (or an error). Mutates `history` in place.

    Returns the number of model calls made.
    """
    max_rounds = int(getattr(state.settings, "max_tool_rounds", 16))
    rounds = 0
    logger.debug("Tool loop start max_rounds=%d tools=%s", max_rounds, ",".join(tool_names()))

    while rounds < max_rounds:
        rounds += 1
        context_message = build_todo_context(state.todos)

        try:
            assistant = state.llm.complete([*history, context_message], TODO_TOOLS)
        except Exception:
            logger.exception("Error calling LLM API (round=%d).", rounds)
            return rounds

        history.append(assistant)

        tool_calls = assistant.get("tool_calls") or []
        if not tool_calls:
            logger.debug("Model answered without tool calls (round=%d).", rounds)
            return rounds

        for call in tool_calls:
            history.append(_run_tool_call(state.todo_store, call))

        state.todos = state.todo_store.refresh_todos()

    logger.warning("Tool loop stopped after %d rounds without a final answer.", rounds)
    return rounds


def send_message(state: AppState, user_text: str) -> list[ChatMessage]:
    """
    Handle one chat message from the UI.

    Blank input is ignored. Otherwise the user message and everything the
    loop produced (even after a failed remote call) is committed to
    state.messages.
    """
    if not (user_text or "").strip():
        return state.messages

    history: list[ChatMessage] = [*state.messages, {"role": "user", "content": user_text}]
    state.is_loading = True
    try:
        rounds = run_tool_loop(state, history)
        logger.info("Chat turn done rounds=%d history=%d", rounds, len(history))
    finally:
        state.messages = history
        state.is_loading = False

    return history
