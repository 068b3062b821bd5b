# src/todo_pilot/cli/main.py

"""
Entrypoint.

Initializes logging, builds AppState, then serves the web UI with uvicorn.
"""

from __future__ import annotations

import logging

import uvicorn

from ..cli.bootstrap import create_initial_state, load_history, save_history
from ..config import get_settings
from ..logging_setup import setup_logging
from ..web.server import create_app

logger = logging.getLogger(__name__)


def _shutdown(state) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    try:
        save_history(state)
    except Exception:
        logger.exception("Failed to save conversation.")

    try:
        state.todo_store.close()
    except Exception:
        logger.debug("TodoStore close failed.", exc_info=True)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)
    state.messages = load_history(state)

    app = create_app(state)
    logger.info("Serving on http://%s:%s", settings.host, settings.port)

    try:
        # log_config=None: keep the handlers installed by setup_logging.
        uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
    finally:
        _shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
