# src/todo_today/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the key-value store, TodoStore and URL opener into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import KeyValueStore
from ..core.state import AppState, WebBrowserOpener
from ..storage.kv_store import SQLiteKeyValueStore
from ..tasks.task_models import ListFilter
from ..tasks.task_store import TodoStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.kv_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, kv: KeyValueStore | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings (and the key-value store) injectable makes the app easier
    to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    if kv is None:
        _ensure_local_dirs(settings)
        kv = SQLiteKeyValueStore(settings.kv_db_path)

    store = TodoStore(kv, seed_tutorial=bool(getattr(settings, "seed_tutorial", True)))

    state = AppState(
        settings=settings,
        kv=kv,
        store=store,
        url_opener=WebBrowserOpener(),
        filter=ListFilter.parse(getattr(settings, "default_filter", "all"), ListFilter.ALL),
    )
    logger.info("State ready: %d tasks, filter=%s", len(store), state.filter)
    return state
