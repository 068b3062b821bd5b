# src/todo_pilot/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires concrete implementations into AppState (LLM/todo store),
- persists the conversation as JSON (optional).
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
from pathlib import Path

from ..config import get_settings
from ..core.persona import initial_messages
from ..core.ports import ChatMessage, LLMClient
from ..core.state import AppState
from ..llm.client import OpenAIChatClient, friendly_llm_error_message
from ..llm.offline import OfflineLLMClient
from ..todos.todo_store import TodoStore

logger = logging.getLogger(__name__)

_HISTORY_ROLES = ("system", "user", "assistant", "tool")


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.todos_db_path.parent.mkdir(parents=True, exist_ok=True)
    settings.history_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    llm_client: LLMClient
    try:
        llm_client = OpenAIChatClient(settings)
        logger.info("LLM client ready model=%s", llm_client.model)
    except RuntimeError as e:
        # Local runs without an API key still get a working UI.
        logger.warning("%s Falling back to offline mode.", friendly_llm_error_message(e))
        llm_client = OfflineLLMClient()

    store = TodoStore(settings.todos_db_path)
    state = AppState(
        settings=settings,
        llm=llm_client,
        todo_store=store,
        save_history=settings.save_history,
    )
    state.todos = store.refresh_todos()
    return state


def load_history(state: AppState) -> list[ChatMessage]:
    """Load the saved conversation; a fresh one (system prompt only) if there is none."""
    if not state.save_history:
        return initial_messages()
    raw_path = getattr(state.settings, "history_path", None)
    if not raw_path:
        return initial_messages()
    path = Path(raw_path)
    if not path.exists():
        return initial_messages()
    try:
        data = json.loads(path.read_text("utf-8"))
        if not isinstance(data, list):
            return initial_messages()
        clean: list[ChatMessage] = [
            m for m in data if isinstance(m, dict) and m.get("role") in _HISTORY_ROLES
        ]
        if not clean or clean[0].get("role") != "system":
            clean = [*initial_messages(), *clean]
        logger.info("Loaded conversation: %d messages from %s", len(clean), path)
        return clean
    except (OSError, ValueError):
        logger.exception("Failed to load conversation from %s", path)
        return initial_messages()


def save_history(state: AppState) -> None:
    if not state.save_history:
        return
    raw_path = getattr(state.settings, "history_path", None)
    if not raw_path:
        return
    path = Path(raw_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(".tmp")
        tmp.write_text(json.dumps(state.messages, ensure_ascii=False, indent=2), "utf-8")
        os.replace(tmp, path)
        with contextlib.suppress(OSError):
            os.chmod(path, 0o600)
        logger.info("Saved conversation: %d messages to %s", len(state.messages), path)
    except (OSError, TypeError, ValueError):
        logger.exception("Failed to save conversation to %s", path)
