# tests/test_config.py

from __future__ import annotations

import os
from pathlib import Path

import pytest

from todo_pilot.config import Settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in list(os.environ):
        if name in ("OPENAI_API_KEY", "OPENAI_BASE_URL") or name.startswith("TODO_PILOT_"):
            monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    s = Settings.from_env()
    assert s.openai_api_key is None
    assert s.llm_model == "gpt-4o"
    assert s.todos_db_path == Path(".local/todo_pilot") / "todos.sqlite3"
    assert s.save_history is False
    assert s.max_tool_rounds == 16
    assert s.port == 8000


def test_prefixed_env_wins_over_generic(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "generic")
    assert Settings.from_env().openai_api_key == "generic"

    monkeypatch.setenv("TODO_PILOT_OPENAI_API_KEY", "prefixed")
    assert Settings.from_env().openai_api_key == "prefixed"


def test_paths_follow_data_dir_and_bad_numbers_fall_back(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("TODO_PILOT_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TODO_PILOT_PORT", "not-a-port")
    monkeypatch.setenv("TODO_PILOT_MAX_TOOL_ROUNDS", "0")
    monkeypatch.setenv("TODO_PILOT_SAVE_HISTORY", "yes")

    s = Settings.from_env()
    assert s.todos_db_path == tmp_path / "todos.sqlite3"
    assert s.history_path == tmp_path / "conversation.json"
    assert s.port == 8000
    assert s.max_tool_rounds == 1
    assert s.save_history is True
