# src/todo_today/tasks/task_api.py

"""
Create/edit forms on top of TodoStore.

A TodoDraft holds the current values of a form. Estimates are clamped to the
fixed picker options here, not in the model; blank titles are rejected here,
not in the store.
"""

from __future__ import annotations

import logging
import re
import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta

from .task_models import ListFilter, Todo, local_now
from .task_store import TodoStore

logger = logging.getLogger(__name__)

HOUR_OPTIONS: tuple[int, ...] = tuple(range(0, 13))
MINUTE_OPTIONS: tuple[int, ...] = (0, 15, 30, 45)
FORM_FIELDS = frozenset({"title", "details", "notes", "h", "hours", "m", "minutes", "due", "today"})

_TRUTHY = {"1", "true", "yes", "y", "on"}
_FALSY = {"0", "false", "no", "n", "off"}
_REL_DAYS = re.compile(r"^\+(\d+)d$")
_WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


class FormError(ValueError):
    """A form field value could not be parsed."""


def clamp_hours(hours: int) -> int:
    return max(HOUR_OPTIONS[0], min(HOUR_OPTIONS[-1], int(hours)))


def clamp_minutes(minutes: int) -> int:
    m = int(minutes)
    return min(MINUTE_OPTIONS, key=lambda opt: (abs(opt - m), opt))


def _parse_int(raw: str, name: str) -> int:
    try:
        return int(raw.strip())
    except ValueError as e:
        raise FormError(f"{name} must be a whole number, got {raw!r}") from e


def _parse_bool(raw: str, name: str) -> bool:
    v = raw.strip().lower()
    if v in _TRUTHY:
        return True
    if v in _FALSY:
        return False
    raise FormError(f"{name} must be yes or no, got {raw!r}")


def parse_due(raw: str, now: datetime) -> datetime:
    """
    Parse a due date typed in the console.

    Accepts: today, tomorrow, +Nd, a weekday name (next occurrence),
    YYYY-MM-DD, YYYY-MM-DD HH:MM or any ISO 8601 timestamp. Dates without a
    time keep the time of day of `now`.
    """
    v = raw.strip().lower()
    if not v:
        raise FormError("due date is empty")

    if v in ("now", "today"):
        return now
    if v == "tomorrow":
        return now + timedelta(days=1)

    m = _REL_DAYS.match(v)
    if m:
        return now + timedelta(days=int(m.group(1)))

    for target, name in enumerate(_WEEKDAYS):
        if v in (name, name[:3]):
            ahead = (target - now.weekday()) % 7 or 7
            return now + timedelta(days=ahead)

    try:
        d = date.fromisoformat(v)
    except ValueError:
        pass
    else:
        return datetime.combine(d, time(now.hour, now.minute), tzinfo=now.tzinfo)

    try:
        dt = datetime.fromisoformat(raw.strip())
    except ValueError as e:
        raise FormError(f"cannot understand due date {raw!r}") from e
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=now.tzinfo)


@dataclass(slots=True)
class TodoDraft:
    title: str = ""
    details: str = ""
    hours: int = 0
    minutes: int = 0
    due_date: datetime = field(default_factory=local_now)
    is_today: bool = False

    @classmethod
    def for_new(cls, flt: ListFilter, now: datetime) -> TodoDraft:
        """Defaults of the add form: due now, in Today when the Today list is open."""
        return cls(due_date=now, is_today=flt is ListFilter.TODAY)

    @classmethod
    def from_todo(cls, todo: Todo) -> TodoDraft:
        return cls(
            title=todo.title,
            details=todo.details,
            hours=todo.estimated_hours,
            minutes=todo.estimated_minutes,
            due_date=todo.due_date,
            is_today=todo.is_today,
        )

    @property
    def trimmed_title(self) -> str:
        return self.title.strip()

    @property
    def can_submit(self) -> bool:
        return bool(self.trimmed_title)

    def set_hours(self, hours: int) -> None:
        self.hours = clamp_hours(hours)

    def set_minutes(self, minutes: int) -> None:
        self.minutes = clamp_minutes(minutes)

    def apply_fields(self, fields: dict[str, str], now: datetime) -> None:
        """
        Apply `key=value` form input.

        Keys: title, details (alias: notes), h/hours, m/minutes, due, today.
        Unknown keys raise FormError; nothing is applied in that case.
        """
        unknown = sorted(set(fields) - FORM_FIELDS)
        if unknown:
            raise FormError(f"unknown field(s): {', '.join(unknown)}")

        # Parse everything first so a bad value leaves the draft untouched.
        parsed: dict[str, object] = {}
        for key, raw in fields.items():
            if key == "title":
                parsed["title"] = raw
            elif key in ("details", "notes"):
                parsed["details"] = raw
            elif key in ("h", "hours"):
                parsed["hours"] = clamp_hours(_parse_int(raw, "hours"))
            elif key in ("m", "minutes"):
                parsed["minutes"] = clamp_minutes(_parse_int(raw, "minutes"))
            elif key == "due":
                parsed["due_date"] = parse_due(raw, now)
            elif key == "today":
                parsed["is_today"] = _parse_bool(raw, "today")

        for name, value in parsed.items():
            setattr(self, name, value)


def split_form_args(args: Iterable[str]) -> tuple[list[str], dict[str, str]]:
    """
    Split command arguments into positional words and key=value fields.

    Only known form keys are fields; any other `a=b` word stays in the title.
    """
    words: list[str] = []
    fields: dict[str, str] = {}
    for a in args:
        key, sep, value = a.partition("=")
        if sep and key.lower() in FORM_FIELDS:
            fields[key.lower()] = value
        else:
            words.append(a)
    return words, fields


def create_todo(store: TodoStore, draft: TodoDraft, *, now: datetime | None = None) -> Todo | None:
    """Append a task built from the draft. Blank titles are a no-op (returns None)."""
    if not draft.can_submit:
        logger.debug("Create rejected: blank title.")
        return None
    todo = Todo.new(
        draft.trimmed_title,
        details=draft.details,
        estimated_hours=clamp_hours(draft.hours),
        estimated_minutes=clamp_minutes(draft.minutes),
        due_date=draft.due_date,
        is_today=draft.is_today,
        now=now if now is not None else store.now(),
    )
    return store.add(todo)


def edit_todo(store: TodoStore, todo_id: uuid.UUID, draft: TodoDraft) -> bool:
    """Overwrite the editable fields of one task. Blank titles are rejected."""
    if not draft.can_submit:
        logger.debug("Edit rejected: blank title id=%s", todo_id)
        return False
    store.update(
        todo_id,
        title=draft.trimmed_title,
        details=draft.details,
        estimated_hours=clamp_hours(draft.hours),
        estimated_minutes=clamp_minutes(draft.minutes),
        due_date=draft.due_date,
    )
    todo = store.get(todo_id)
    if todo.is_today != draft.is_today:
        store.set_today(todo_id, draft.is_today)
    return True
