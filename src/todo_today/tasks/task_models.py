# src/todo_today/tasks/task_models.py

from __future__ import annotations

import json
import math
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any


class TodoDecodeError(ValueError):
    """Persisted task data could not be decoded."""


class ListFilter(StrEnum):
    """
    Which slice of the list the user is looking at.

    Notes:
    - ALL means "every task not marked today" (today items live only under TODAY).
    """

    ALL = "all"
    TODAY = "today"

    @property
    def label(self) -> str:
        return "All" if self is ListFilter.ALL else "Today"

    @classmethod
    def parse(cls, raw: str | None, default: ListFilter | None = None) -> ListFilter:
        value = (raw or "").strip().lower()
        try:
            return cls(value)
        except ValueError:
            if default is not None:
                return default
            raise


def local_now() -> datetime:
    return datetime.now().astimezone()


def _to_aware(dt: datetime) -> datetime:
    # Naive values are local wall-clock time.
    return dt if dt.tzinfo is not None else dt.astimezone()


def _decode_datetime(raw: Any, key: str) -> datetime:
    if isinstance(raw, bool):
        raise TodoDecodeError(f"{key}: expected a date, got {raw!r}")
    if isinstance(raw, (int, float)):
        try:
            return datetime.fromtimestamp(float(raw)).astimezone()
        except (OverflowError, OSError, ValueError) as e:
            raise TodoDecodeError(f"{key}: timestamp out of range {raw!r}") from e
    if isinstance(raw, str):
        try:
            return _to_aware(datetime.fromisoformat(raw))
        except ValueError as e:
            raise TodoDecodeError(f"{key}: invalid date {raw!r}") from e
    raise TodoDecodeError(f"{key}: expected a date, got {type(raw).__name__}")


def _decode_int(raw: Any, key: str, default: int) -> int:
    if raw is None:
        return default
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise TodoDecodeError(f"{key}: expected an integer, got {raw!r}")
    if isinstance(raw, float) and not math.isfinite(raw):
        raise TodoDecodeError(f"{key}: expected a finite number, got {raw!r}")
    return int(raw)


def _decode_bool(raw: Any, key: str, default: bool) -> bool:
    if raw is None:
        return default
    if not isinstance(raw, bool):
        raise TodoDecodeError(f"{key}: expected a boolean, got {raw!r}")
    return raw


@dataclass(slots=True)
class Todo:
    """
    One to-do item.

    `id` and `created_at` are set once and never written again; everything
    else is mutable through TodoStore.
    """

    title: str
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    details: str = ""
    estimated_hours: int = 0
    estimated_minutes: int = 0
    due_date: datetime = field(default_factory=local_now)
    created_at: datetime = field(default_factory=local_now)
    is_done: bool = False
    is_today: bool = False

    @classmethod
    def new(
        cls,
        title: str,
        *,
        details: str = "",
        estimated_hours: int = 0,
        estimated_minutes: int = 0,
        due_date: datetime | None = None,
        is_today: bool = False,
        now: datetime | None = None,
    ) -> Todo:
        created = _to_aware(now) if now is not None else local_now()
        return cls(
            title=title,
            details=details,
            estimated_hours=estimated_hours,
            estimated_minutes=estimated_minutes,
            due_date=_to_aware(due_date) if due_date is not None else created,
            created_at=created,
            is_today=is_today,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "title": self.title,
            "details": self.details,
            "estimatedHours": self.estimated_hours,
            "estimatedMinutes": self.estimated_minutes,
            "dueDate": self.due_date.isoformat(),
            "createdAt": self.created_at.isoformat(),
            "isDone": self.is_done,
            "isToday": self.is_today,
        }

    @classmethod
    def from_dict(cls, raw: Any, *, now: datetime | None = None) -> Todo:
        """
        Decode one persisted task.

        Only id and title are required. Entries written before dates existed
        carry just id/title/isDone/isToday: createdAt then falls back to
        dueDate, else to `now`. dueDate falls back to createdAt.
        """
        if not isinstance(raw, dict):
            raise TodoDecodeError(f"task entry must be an object, got {type(raw).__name__}")

        raw_id = raw.get("id")
        if not isinstance(raw_id, str):
            raise TodoDecodeError("id: missing or not a string")
        try:
            todo_id = uuid.UUID(raw_id)
        except ValueError as e:
            raise TodoDecodeError(f"id: invalid UUID {raw_id!r}") from e

        title = raw.get("title")
        if not isinstance(title, str):
            raise TodoDecodeError("title: missing or not a string")

        created_raw = raw.get("createdAt")
        due_raw = raw.get("dueDate")
        due_date = None if due_raw is None else _decode_datetime(due_raw, "dueDate")
        if created_raw is not None:
            created_at = _decode_datetime(created_raw, "createdAt")
        elif due_date is not None:
            created_at = due_date
        else:
            created_at = _to_aware(now) if now is not None else local_now()
        if due_date is None:
            due_date = created_at

        details = raw.get("details")
        if details is None:
            details = ""
        elif not isinstance(details, str):
            raise TodoDecodeError("details: expected a string")

        return cls(
            id=todo_id,
            title=title,
            details=details,
            estimated_hours=_decode_int(raw.get("estimatedHours"), "estimatedHours", 0),
            estimated_minutes=_decode_int(raw.get("estimatedMinutes"), "estimatedMinutes", 0),
            due_date=due_date,
            created_at=created_at,
            is_done=_decode_bool(raw.get("isDone"), "isDone", False),
            is_today=_decode_bool(raw.get("isToday"), "isToday", False),
        )


def encode_todos(todos: list[Todo]) -> str:
    return json.dumps([t.to_dict() for t in todos], ensure_ascii=False)


def decode_todos(blob: str | bytes, *, now: datetime | None = None) -> list[Todo]:
    """Decode a whole persisted list. One bad entry makes the blob undecodable."""
    try:
        data = json.loads(blob)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise TodoDecodeError(f"not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise TodoDecodeError(f"expected a JSON array, got {type(data).__name__}")
    return [Todo.from_dict(item, now=now) for item in data]
