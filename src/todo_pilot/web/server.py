# src/todo_pilot/web/server.py

"""
Web interface: a single page with the todo list and the chat.

Endpoints:
    GET  /                  -> page
    GET  /api/todos         -> current todo snapshot
    GET  /api/messages      -> visible chat messages + loading flag
    POST /api/chat          -> run one chat turn, return messages + todos
    GET  /api/health        -> liveness + store size
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from fastapi import FastAPI
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

from ..core.chat import send_message, visible_messages
from ..core.state import AppState

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"


class ChatRequest(BaseModel):
    message: str


def _todos_payload(state: AppState) -> list[dict[str, Any]]:
    return [t.to_dict() for t in state.todos]


def create_app(state: AppState) -> FastAPI:
    app = FastAPI(title=str(getattr(state.settings, "app_name", "todo-pilot")))
    app.state.todo_pilot = state

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    @app.get("/")
    def index() -> FileResponse:
        return FileResponse(STATIC_DIR / "index.html")

    @app.get("/api/todos")
    def api_todos() -> JSONResponse:
        return JSONResponse({"todos": _todos_payload(state)})

    @app.get("/api/messages")
    def api_messages() -> JSONResponse:
        return JSONResponse(
            {"messages": visible_messages(state.messages), "is_loading": state.is_loading}
        )

    @app.post("/api/chat")
    def api_chat(req: ChatRequest) -> JSONResponse:
        # Sync handler: FastAPI runs it in the threadpool, the lock keeps turns serial.
        with state.lock:
            send_message(state, req.message)
            return JSONResponse(
                {
                    "messages": visible_messages(state.messages),
                    "todos": _todos_payload(state),
                }
            )

    @app.get("/api/health")
    def api_health() -> JSONResponse:
        return JSONResponse(
            {
                "status": "ok",
                "todos": len(state.todos),
                "llm": type(state.llm).__name__,
            }
        )

    return app
