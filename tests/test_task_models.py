# tests/test_task_models.py

from __future__ import annotations

import json
import uuid
from datetime import datetime, timedelta, timezone

import pytest

from todo_today.tasks.task_models import (
    ListFilter,
    Todo,
    TodoDecodeError,
    decode_todos,
    encode_todos,
)

from .fakes import NOW


def test_empty_list_round_trip() -> None:
    assert encode_todos([]) == "[]"
    assert decode_todos(encode_todos([])) == []


def test_round_trip_keeps_identity_and_fields() -> None:
    todos = [
        Todo.new("Write report", details="Q3 numbers", estimated_hours=2, estimated_minutes=30, now=NOW),
        Todo.new("Call mom", due_date=NOW + timedelta(days=2), is_today=True, now=NOW),
        Todo.new("Water plants", now=NOW - timedelta(hours=3)),
    ]
    todos[2].is_done = True

    decoded = decode_todos(encode_todos(todos).encode("utf-8"))

    assert decoded == todos
    assert [t.id for t in decoded] == [t.id for t in todos]


def test_new_defaults_due_date_to_creation_time() -> None:
    todo = Todo.new("Buy milk", now=NOW)
    assert todo.due_date == todo.created_at == NOW
    assert todo.details == ""
    assert (todo.estimated_hours, todo.estimated_minutes) == (0, 0)
    assert not todo.is_done
    assert not todo.is_today


def test_missing_optional_fields_get_defaults() -> None:
    tid = uuid.uuid4()
    blob = json.dumps([{"id": str(tid), "title": "Old entry", "createdAt": "2026-10-01T08:00:00+00:00"}])

    (todo,) = decode_todos(blob)

    assert todo.id == tid
    assert todo.title == "Old entry"
    assert todo.details == ""
    assert todo.estimated_hours == 0
    assert todo.estimated_minutes == 0
    assert todo.is_done is False
    assert todo.is_today is False
    assert todo.created_at == datetime(2026, 10, 1, 8, 0, tzinfo=timezone.utc)
    assert todo.due_date == todo.created_at


def test_entries_without_dates_decode_with_defaults() -> None:
    # The earliest saved layout: id, title and the two flags only.
    blob = json.dumps(
        [
            {"id": str(uuid.uuid4()), "title": "Buy milk", "isDone": False, "isToday": True},
            {"id": str(uuid.uuid4()), "title": "Call mom", "isDone": True, "isToday": False},
        ]
    )

    first, second = decode_todos(blob, now=NOW)

    assert [first.title, second.title] == ["Buy milk", "Call mom"]
    assert first.is_today and not first.is_done
    assert second.is_done and not second.is_today
    assert first.created_at == first.due_date == NOW
    assert first.details == ""
    assert (first.estimated_hours, first.estimated_minutes) == (0, 0)


def test_missing_created_at_falls_back_to_due_date() -> None:
    raw = {"id": str(uuid.uuid4()), "title": "x", "dueDate": "2026-10-20T12:00:00+00:00"}
    todo = Todo.from_dict(raw, now=NOW)
    assert todo.created_at == todo.due_date == datetime(2026, 10, 20, 12, 0, tzinfo=timezone.utc)


def test_naive_and_numeric_dates_are_accepted() -> None:
    raw = {
        "id": str(uuid.uuid4()),
        "title": "x",
        "createdAt": "2026-10-01T08:00:00",
        "dueDate": NOW.timestamp(),
    }
    todo = Todo.from_dict(raw)
    assert todo.created_at.tzinfo is not None
    assert todo.due_date == NOW


@pytest.mark.parametrize(
    "blob",
    [
        "not json",
        "{}",
        '[{"title": "no id", "createdAt": "2026-10-01T08:00:00+00:00"}]',
        '[{"id": "not-a-uuid", "title": "x", "createdAt": "2026-10-01T08:00:00+00:00"}]',
        '[{"id": "6f1c1a52-8d0e-4c55-9d43-2d7c1f0b7a10", "createdAt": "2026-10-01T08:00:00+00:00"}]',
        '[{"id": "6f1c1a52-8d0e-4c55-9d43-2d7c1f0b7a10", "title": "x",'
        ' "createdAt": "2026-10-01T08:00:00+00:00", "isDone": "yes"}]',
        '[{"id": "6f1c1a52-8d0e-4c55-9d43-2d7c1f0b7a10", "title": "x", "createdAt": 1e20}]',
        '[{"id": "6f1c1a52-8d0e-4c55-9d43-2d7c1f0b7a10", "title": "x", "createdAt": Infinity}]',
        '[{"id": "6f1c1a52-8d0e-4c55-9d43-2d7c1f0b7a10", "title": "x", "dueDate": NaN}]',
        '[{"id": "6f1c1a52-8d0e-4c55-9d43-2d7c1f0b7a10", "title": "x", "estimatedHours": NaN}]',
        '[{"id": "6f1c1a52-8d0e-4c55-9d43-2d7c1f0b7a10", "title": "x", "estimatedMinutes": -Infinity}]',
    ],
)
def test_undecodable_blobs_raise(blob: str) -> None:
    with pytest.raises(TodoDecodeError):
        decode_todos(blob)


def test_one_bad_entry_rejects_the_whole_blob() -> None:
    good = Todo.new("fine", now=NOW).to_dict()
    with pytest.raises(TodoDecodeError):
        decode_todos(json.dumps([good, {"title": 3}]))


def test_list_filter_parse() -> None:
    assert ListFilter.parse("Today") is ListFilter.TODAY
    assert ListFilter.parse(" all ") is ListFilter.ALL
    assert ListFilter.parse("weekly", ListFilter.ALL) is ListFilter.ALL
    with pytest.raises(ValueError):
        ListFilter.parse("weekly")
