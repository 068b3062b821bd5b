# src/todo_pilot/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No secrets required at import time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TODO_PILOT"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- LLM ----
    openai_api_key: str | None
    openai_base_url: str
    llm_model: str
    llm_connect_timeout: float
    llm_read_timeout: float
    llm_max_retries: int
    max_tool_rounds: int

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    todos_db_path: Path
    save_history: bool
    history_path: Path

    # ---- Web server ----
    host: str
    port: int

    @staticmethod
    def from_env() -> Settings:
        app_name = _env(_k("APP_NAME"), "todo-pilot")
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        openai_api_key = _first_env(_k("OPENAI_API_KEY"), "OPENAI_API_KEY", default=None)
        openai_base_url = _first_env(_k("OPENAI_BASE_URL"), "OPENAI_BASE_URL", default="") or ""
        llm_model = _env(_k("LLM_MODEL"), "gpt-4o")

        llm_connect_timeout = _env_float(_k("LLM_CONNECT_TIMEOUT_SECONDS"), 5.0)
        llm_read_timeout = _env_float(_k("LLM_READ_TIMEOUT_SECONDS"), 60.0)
        llm_max_retries = _env_int(_k("LLM_MAX_RETRIES"), 2)
        max_tool_rounds = _env_int(_k("MAX_TOOL_ROUNDS"), 16)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/todo_pilot"))
        todos_db_path = _env_path(_k("TODOS_DB_PATH"), data_dir / "todos.sqlite3")
        save_history = _env_bool(_k("SAVE_HISTORY"), False)
        history_path = _env_path(_k("HISTORY_PATH"), data_dir / "conversation.json")

        host = _env(_k("HOST"), "127.0.0.1")
        port = _env_int(_k("PORT"), 8000)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            openai_api_key=openai_api_key,
            openai_base_url=openai_base_url,
            llm_model=llm_model,
            llm_connect_timeout=llm_connect_timeout,
            llm_read_timeout=max(llm_read_timeout, llm_connect_timeout),
            llm_max_retries=max(0, llm_max_retries),
            max_tool_rounds=max(1, max_tool_rounds),
            data_dir=data_dir,
            todos_db_path=todos_db_path,
            save_history=save_history,
            history_path=history_path,
            host=host,
            port=port,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    """Load .env (without overriding the real environment) and build settings once."""
    global _SETTINGS
    if _SETTINGS is None:
        load_dotenv(override=False)
        _SETTINGS = Settings.from_env()
    return _SETTINGS
