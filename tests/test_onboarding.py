# tests/test_onboarding.py

from __future__ import annotations

import pytest

from todo_today.cli.bootstrap import create_initial_state
from todo_today.core.onboarding import (
    ONBOARDING_PAGES,
    mark_onboarding_shown,
    render_onboarding,
    reset_onboarding,
    should_show_onboarding,
)
from todo_today.storage.kv_store import SQLiteKeyValueStore
from todo_today.tasks.task_models import ListFilter
from todo_today.tasks.task_store import TUTORIAL_SEEDED_KEY

from .fakes import FakeKeyValueStore


def test_onboarding_flag_lifecycle() -> None:
    kv = FakeKeyValueStore()
    assert should_show_onboarding(kv) is True
    mark_onboarding_shown(kv)
    assert should_show_onboarding(kv) is False
    reset_onboarding(kv)
    assert should_show_onboarding(kv) is True


def test_onboarding_flag_is_independent_of_tasks() -> None:
    kv = FakeKeyValueStore()
    mark_onboarding_shown(kv)
    assert kv.get_bool(TUTORIAL_SEEDED_KEY) is False
    assert kv.todo_writes == 0


def test_render_onboarding_has_every_page() -> None:
    text = render_onboarding("My list")
    assert "My list" in text
    for title, _body in ONBOARDING_PAGES:
        assert title in text


def test_bootstrap_wires_sqlite_store_and_default_filter(settings) -> None:
    settings.default_filter = "today"

    state = create_initial_state(settings=settings)

    assert isinstance(state.kv, SQLiteKeyValueStore)
    assert settings.kv_db_path.exists()
    assert state.filter is ListFilter.TODAY
    assert len(state.store) == 2


def test_bootstrap_respects_seed_switch(settings) -> None:
    settings.seed_tutorial = False
    settings.default_filter = "nonsense"

    state = create_initial_state(settings=settings, kv=FakeKeyValueStore())

    assert len(state.store) == 0
    assert state.filter is ListFilter.ALL


def test_main_shows_onboarding_once(state, monkeypatch, capsys) -> None:
    from todo_today.cli import main as main_mod

    prompts: list[str] = []
    monkeypatch.setattr("builtins.input", lambda prompt="": prompts.append(prompt) or "")

    main_mod._maybe_show_onboarding(state)
    main_mod._maybe_show_onboarding(state)

    assert len(prompts) == 1
    assert "Welcome" in capsys.readouterr().out
    assert should_show_onboarding(state.kv) is False


def test_main_skips_onboarding_when_disabled(state, monkeypatch) -> None:
    from todo_today.cli import main as main_mod

    state.settings.show_onboarding = False
    monkeypatch.setattr("builtins.input", lambda prompt="": pytest.fail("should not prompt"))

    main_mod._maybe_show_onboarding(state)
    assert should_show_onboarding(state.kv) is True
