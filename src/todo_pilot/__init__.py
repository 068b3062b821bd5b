"""Chat-driven todo list manager backed by SQLite and an OpenAI-compatible model."""
