# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_today.core.state import AppState
from todo_today.tasks.task_models import ListFilter
from todo_today.tasks.task_store import TodoStore

from .fakes import NOW, FakeKeyValueStore, FakeUrlOpener, FixedClock


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="todo-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        kv_db_path=tmp_path / "storage.sqlite3",
        log_dir=tmp_path,
        default_filter="all",
        seed_tutorial=True,
        show_onboarding=True,
        console_enabled=True,
        privacy_policy_url="https://example.com/privacy",
    )


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture()
def kv() -> FakeKeyValueStore:
    return FakeKeyValueStore()


@pytest.fixture()
def store(kv: FakeKeyValueStore, clock: FixedClock) -> TodoStore:
    """Empty store (tutorial seeding is covered by its own tests)."""
    return TodoStore(kv, clock=clock, seed_tutorial=False)


@pytest.fixture()
def url_opener() -> FakeUrlOpener:
    return FakeUrlOpener()


@pytest.fixture()
def state(
    settings: SimpleNamespace,
    kv: FakeKeyValueStore,
    store: TodoStore,
    url_opener: FakeUrlOpener,
) -> AppState:
    """
    AppState wired with deterministic fakes.

    NOTE: the store is the real TodoStore; only its key-value backend is faked.
    """
    return AppState(
        settings=settings,
        kv=kv,
        store=store,
        url_opener=url_opener,
        filter=ListFilter.ALL,
    )
