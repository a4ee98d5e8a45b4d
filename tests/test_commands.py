# tests/test_commands.py

from __future__ import annotations

from datetime import timedelta

from todo_today.cli.commands import CommandRegistry, quick_add, registry, resolve_todo
from todo_today.core.onboarding import ONBOARDING_SHOWN_KEY
from todo_today.core.state import AppState
from todo_today.tasks.task_models import ListFilter, Todo

from .fakes import NOW


def _run(state: AppState, line: str) -> str:
    reply = registry.handle(state, line)
    assert reply is not None
    return reply


def test_command_registry_routes_2_and_3_params(state) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}

    def h2(state, args):
        called["h2"] += 1
        return "h2:" + "|".join(args)

    def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b", aliases=["bee"])

    assert reg.handle(state, '/a x "y z"') == "h2:x|y z"
    notes: list[str] = []
    assert reg.handle(state, "/BEE", emit=notes.append) == "h3"
    assert notes == ["note"]
    assert called == {"h2": 1, "h3": 1}


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_help_lists_commands(state) -> None:
    text = _run(state, "/help")
    for name in ("/add", "/done", "/today", "/filter", "/rm", "/edit", "/settings"):
        assert name in text


def test_add_with_fields(state) -> None:
    reply = _run(state, '/add Buy milk due=tomorrow h=1 m=20 details="two bottles"')
    (todo,) = state.store.todos
    assert reply.startswith("Added: Buy milk")
    assert todo.title == "Buy milk"
    assert todo.details == "two bottles"
    assert (todo.estimated_hours, todo.estimated_minutes) == (1, 15)
    assert todo.due_date == NOW + timedelta(days=1)
    assert todo.is_today is False


def test_add_blank_title_changes_nothing(state) -> None:
    reply = _run(state, '/add "   "')
    assert "Title required" in reply
    assert len(state.store) == 0
    assert "Title required" in quick_add(state, "   ")
    assert len(state.store) == 0


def test_add_bad_field_changes_nothing(state) -> None:
    reply = _run(state, "/add Something due=someday")
    assert reply.startswith("Not added")
    assert len(state.store) == 0


def test_add_keeps_equation_words_in_title(state) -> None:
    assert _run(state, "/add e=mc2 talk h=1").startswith("Added")
    (todo,) = state.store.todos
    assert todo.title == "e=mc2 talk"
    assert todo.estimated_hours == 1


def test_edit_rejects_misspelled_field(state) -> None:
    todo = state.store.add(Todo.new("Draft", now=NOW))
    reply = _run(state, "/edit 1 titel=Other")
    assert reply.startswith("Not saved")
    assert todo.title == "Draft"


def test_add_in_today_view_marks_today(state) -> None:
    _run(state, "/filter today")
    assert state.filter is ListFilter.TODAY
    quick_add(state, "Stand-up notes")
    (todo,) = state.store.todos
    assert todo.is_today is True


def test_filter_without_args_and_bad_value(state) -> None:
    assert "Filter is All" in _run(state, "/filter")
    assert "Usage" in _run(state, "/filter weekly")
    assert state.filter is ListFilter.ALL


def test_row_numbers_follow_the_current_view(state) -> None:
    late = state.store.add(Todo.new("late", due_date=NOW + timedelta(days=2), now=NOW))
    early = state.store.add(Todo.new("early", due_date=NOW, now=NOW))
    today = state.store.add(Todo.new("today", is_today=True, now=NOW))

    assert resolve_todo(state, "1") is early
    assert resolve_todo(state, "2.") is late
    # Not in the current view, but reachable by id prefix.
    assert resolve_todo(state, str(today.id)[:13]) is today

    _run(state, "/done 1")
    assert early.is_done is True
    # Done rows move below pending ones.
    assert resolve_todo(state, "1") is late
    assert resolve_todo(state, "2") is early


def test_done_today_rm_by_row(state) -> None:
    a = state.store.add(Todo.new("a", now=NOW))
    b = state.store.add(Todo.new("b", due_date=NOW + timedelta(hours=1), now=NOW))

    assert _run(state, "/done 1").startswith("Done: a")
    assert _run(state, "/done 2").startswith("Back to pending: a")

    assert _run(state, "/today 1").startswith("Planned for today: a")
    assert a.is_today is True
    assert [t.title for t in state.store.todos if not t.is_today] == ["b"]

    assert _run(state, "/rm 1").startswith("Deleted: b")
    assert state.store.todos == (a,)
    assert b not in state.store.todos


def test_unknown_rows_are_reported(state) -> None:
    assert "No row 3" in _run(state, "/done 3")
    assert "Usage" in _run(state, "/rm")
    assert "No task" in _run(state, "/show zz")


def test_edit_and_show(state) -> None:
    todo = state.store.add(Todo.new("Draft", now=NOW))

    assert "Fields:" in _run(state, "/edit 1")
    assert _run(state, '/edit 1 title="Final draft" h=2 today=yes').startswith("Saved")
    assert todo.title == "Final draft"
    assert todo.estimated_hours == 2
    assert todo.is_today is True

    state.filter = ListFilter.TODAY
    assert "Title required" in _run(state, '/edit 1 title=" "')
    assert todo.title == "Final draft"
    assert "Final draft" in _run(state, "/show 1")


def test_mv_reorders_stored_list(state) -> None:
    a = state.store.add(Todo.new("a", now=NOW))
    b = state.store.add(Todo.new("b", now=NOW))
    assert _run(state, "/mv 2 1").endswith("position 1")
    assert state.store.todos == (b, a)
    assert "Usage" in _run(state, "/mv 1")


def test_settings_privacy_onboarding_reset(state, url_opener) -> None:
    state.store.add(Todo.new("a", now=NOW))

    assert "1 total" in _run(state, "/settings")

    assert _run(state, "/privacy") == "Opened https://example.com/privacy"
    assert url_opener.opened == ["https://example.com/privacy"]
    url_opener.result = False
    assert _run(state, "/privacy") == "Privacy policy: https://example.com/privacy"

    shown: list[str] = []
    assert registry.handle(state, "/onboarding", emit=shown.append) == "Welcome screen shown."
    assert shown and "Welcome" in shown[0]
    assert state.kv.get_bool(ONBOARDING_SHOWN_KEY) is True

    assert "/reset confirm" in _run(state, "/reset")
    assert len(state.store) == 1
    assert _run(state, "/reset confirm") == "Deleted 1 task(s)."
    assert len(state.store) == 0
