# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit real secrets. Use .env (local, gitignored); see .env.example.
"""

ENV_VARS = {
    # App / logging
    "TODO_PILOT_APP_NAME": "App display name (default: todo-pilot).",
    "TODO_PILOT_LOG_LEVEL": "Console logging level (default: INFO).",
    # LLM
    "TODO_PILOT_OPENAI_API_KEY": "API key (falls back to OPENAI_API_KEY; empty => offline mode).",
    "TODO_PILOT_OPENAI_BASE_URL": "Optional OpenAI-compatible base URL (falls back to OPENAI_BASE_URL).",
    "TODO_PILOT_LLM_MODEL": "Chat model with tool support (default: gpt-4o).",
    "TODO_PILOT_LLM_CONNECT_TIMEOUT_SECONDS": "HTTP connect timeout (default: 5).",
    "TODO_PILOT_LLM_READ_TIMEOUT_SECONDS": "HTTP read timeout (default: 60).",
    "TODO_PILOT_LLM_MAX_RETRIES": "SDK retries per model call (default: 2).",
    "TODO_PILOT_MAX_TOOL_ROUNDS": "Max model calls per chat message (default: 16).",
    # Paths (gitignored)
    "TODO_PILOT_DATA_DIR": "Local data directory (default: .local/todo_pilot).",
    "TODO_PILOT_TODOS_DB_PATH": "TodoStore SQLite path (default: <data_dir>/todos.sqlite3).",
    "TODO_PILOT_SAVE_HISTORY": "Persist the conversation between runs (true/false, default: false).",
    "TODO_PILOT_HISTORY_PATH": "Conversation JSON path (default: <data_dir>/conversation.json).",
    # Web
    "TODO_PILOT_HOST": "Bind address (default: 127.0.0.1).",
    "TODO_PILOT_PORT": "Port (default: 8000).",
}
