# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_pilot.core.state import AppState
from todo_pilot.todos.todo_store import TodoStore

from .fakes import FakeLLMClient


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and core modules.

    A SimpleNamespace rather than the real config keeps tests isolated
    from the environment and any local .env.
    """
    return SimpleNamespace(
        app_name="todo-pilot-test",
        log_level="DEBUG",
        openai_api_key=None,
        openai_base_url="",
        llm_model="test-model",
        llm_connect_timeout=1.0,
        llm_read_timeout=1.0,
        llm_max_retries=0,
        max_tool_rounds=8,
        data_dir=tmp_path,
        todos_db_path=tmp_path / "todos.sqlite3",
        save_history=True,
        history_path=tmp_path / "conversation.json",
        host="127.0.0.1",
        port=0,
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> TodoStore:
    return TodoStore(settings.todos_db_path)


@pytest.fixture()
def llm() -> FakeLLMClient:
    return FakeLLMClient()


@pytest.fixture()
def state(settings: SimpleNamespace, store: TodoStore, llm: FakeLLMClient) -> AppState:
    """
    AppState wired with a scripted LLM.

    The real SQLite store is kept: its behavior is part of what we test.
    """
    return AppState(settings=settings, llm=llm, todo_store=store, save_history=True)
