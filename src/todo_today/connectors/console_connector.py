# src/todo_today/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..cli.commands import quick_add
from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..tasks.task_store import TodoStore
from ..ui.formatting import render_list

logger = logging.getLogger(__name__)

EXIT_COMMANDS = ("/exit", "/quit", "/q")


def _print_list(state: AppState, out: Callable[[str], None]) -> None:
    out(render_list(state.store.todos, state.filter, state.store.now()))


def run_console_loop(
    state: AppState,
    *,
    read: Callable[[str], str] = input,
    out: Callable[[str], None] = print,
) -> None:
    """
    Interactive loop: one line in, one reply out.

    The list is re-printed after any command that changed the store
    (the store notifies us; we never keep our own copy of the tasks).
    """
    logger.info("Console connector started (filter=%s).", state.filter)

    changed = False

    def on_change(_store: TodoStore) -> None:
        nonlocal changed
        changed = True

    unsubscribe = state.store.subscribe(on_change)

    def emit(text: str) -> None:
        out(text)

    _print_list(state, out)
    out("\nType a task title to add it, /help for commands, /exit to quit.")

    try:
        while True:
            try:
                user_input = read("\n> ").strip()
            except EOFError:
                logger.info("Console EOF received, exiting.")
                break
            except KeyboardInterrupt:
                logger.info("Console KeyboardInterrupt, exiting.")
                out("")
                break

            if not user_input:
                continue

            if user_input.lower() in EXIT_COMMANDS:
                logger.info("Console exit command received.")
                break

            changed = False
            try:
                reply = command_registry.handle(state, user_input, emit=emit)
                if reply is None:
                    # Plain text is a quick add.
                    reply = quick_add(state, user_input)
            except Exception:
                logger.exception("Command handler crashed.")
                reply = "Internal error while handling a command."

            if changed:
                _print_list(state, out)
                out("")
            out(reply)
    finally:
        unsubscribe()

    logger.info("Console connector finished.")
