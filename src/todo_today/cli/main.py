# src/todo_today/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, shows the first-run welcome screen,
then runs the console REPL in the main thread.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.onboarding import mark_onboarding_shown, render_onboarding, should_show_onboarding
from ..core.state import AppState
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _shutdown(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    # Every mutation is already persisted; this is a last safety write.
    if not state.store.save():
        logger.warning("Final save failed; the last change may be lost.")
    try:
        close = getattr(state.kv, "close", None)
        if close is not None:
            close()
    except Exception:
        logger.debug("Key-value store close failed.", exc_info=True)


def _maybe_show_onboarding(state: AppState) -> None:
    if not getattr(state.settings, "show_onboarding", True):
        return
    if not should_show_onboarding(state.kv):
        return
    print(render_onboarding(str(getattr(state.settings, "app_name", "todo-today"))))
    try:
        input("Press Enter to start...")
    except (EOFError, KeyboardInterrupt):
        print()
    mark_onboarding_shown(state.kv)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)

    log_dir = getattr(settings, "log_dir", getattr(settings, "data_dir", ".local/todo-today"))
    setup_logging(log_dir=log_dir, console_level=console_level)

    logger.info("Starting %s...", getattr(settings, "app_name", "todo-today"))

    state = create_initial_state(settings=settings)

    try:
        if settings.console_enabled:
            _maybe_show_onboarding(state)
            run_console_loop(state)
        else:
            logger.info("Console disabled; nothing to do.")
    finally:
        _shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
