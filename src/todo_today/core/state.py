# src/todo_today/core/state.py

from __future__ import annotations

import webbrowser
from dataclasses import dataclass, field
from typing import Any

from ..tasks.task_models import ListFilter
from ..tasks.task_store import TodoStore
from .ports import KeyValueStore, UrlOpener


class WebBrowserOpener:
    """UrlOpener backed by the system browser."""

    def open(self, url: str) -> bool:
        return webbrowser.open(url, new=2)


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: Any

    kv: KeyValueStore
    store: TodoStore
    url_opener: UrlOpener = field(default_factory=WebBrowserOpener)

    # Transient UI state (never persisted).
    filter: ListFilter = ListFilter.ALL
