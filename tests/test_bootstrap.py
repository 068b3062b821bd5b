# tests/test_bootstrap.py

from __future__ import annotations

import json
import logging

from todo_pilot.cli.bootstrap import create_initial_state, load_history, save_history
from todo_pilot.core.persona import get_system_prompt
from todo_pilot.llm.client import OpenAIChatClient, friendly_llm_error_message
from todo_pilot.llm.offline import OfflineLLMClient


def test_without_api_key_falls_back_to_offline(settings) -> None:
    state = create_initial_state(settings=settings)
    assert isinstance(state.llm, OfflineLLMClient)
    assert state.todos == []
    assert state.messages == [{"role": "system", "content": get_system_prompt()}]


def test_with_api_key_builds_openai_client(settings, caplog) -> None:
    settings.openai_api_key = "sk-test"
    with caplog.at_level(logging.INFO, logger="todo_pilot"):
        state = create_initial_state(settings=settings)
    assert isinstance(state.llm, OpenAIChatClient)
    assert state.llm.model == "test-model"
    assert "LLM client ready model=test-model" in caplog.text


def test_state_starts_with_existing_todos(settings) -> None:
    first = create_initial_state(settings=settings)
    first.todo_store.add_todos([{"text": "Existing", "subtasks": []}])

    second = create_initial_state(settings=settings)
    assert [t.text for t in second.todos] == ["Existing"]


def test_history_round_trip(settings) -> None:
    state = create_initial_state(settings=settings)
    state.messages.append({"role": "user", "content": "hi"})
    state.messages.append({"role": "assistant", "content": "hello"})
    save_history(state)

    assert settings.history_path.exists()
    restored = create_initial_state(settings=settings)
    assert load_history(restored) == state.messages


def test_history_disabled_or_corrupt_gives_fresh_conversation(settings) -> None:
    settings.history_path.write_text("{not json", "utf-8")
    state = create_initial_state(settings=settings)
    assert load_history(state) == [{"role": "system", "content": get_system_prompt()}]

    settings.history_path.write_text(json.dumps([{"role": "user", "content": "x"}]), "utf-8")
    state.save_history = False
    assert load_history(state) == [{"role": "system", "content": get_system_prompt()}]


def test_offline_client_echoes_last_user_message() -> None:
    reply = OfflineLLMClient().complete(
        [{"role": "system", "content": "s"}, {"role": "user", "content": "add milk"}], []
    )
    assert reply["role"] == "assistant"
    assert "tool_calls" not in reply
    assert "You said: add milk" in reply["content"]


def test_friendly_error_message() -> None:
    err = RuntimeError("LLM API key is not set. Set TODO_PILOT_OPENAI_API_KEY in your .env.")
    assert "missing API key" in friendly_llm_error_message(err)
    assert friendly_llm_error_message(RuntimeError("")) == "LLM error."
