# src/todo_pilot/core/state.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any

from .persona import initial_messages
from .ports import ChatMessage, LLMClient, TodoRepo


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: Any

    llm: LLMClient
    todo_store: TodoRepo
    save_history: bool = False

    # Full conversation as sent to the model (system, user, assistant, tool).
    messages: list[ChatMessage] = field(default_factory=initial_messages)

    # Last snapshot of the store, rendered by the UI and injected into prompts.
    todos: list[Any] = field(default_factory=list)

    is_loading: bool = False

    # One tool loop at a time.
    lock: threading.Lock = field(default_factory=threading.Lock)
