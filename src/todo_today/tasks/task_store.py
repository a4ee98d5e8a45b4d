# src/todo_today/tasks/task_store.py

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Iterator
from datetime import datetime, timedelta

from ..core.ports import Clock, KeyValueStore
from .task_models import Todo, TodoDecodeError, decode_todos, encode_todos, local_now

logger = logging.getLogger(__name__)

TODOS_KEY = "todos_key"
TUTORIAL_SEEDED_KEY = "tutorial_seeded"

Observer = Callable[["TodoStore"], None]


class TodoNotFoundError(KeyError):
    """No task with the given id."""


def tutorial_todos(now: datetime) -> list[Todo]:
    """The two explanatory tasks inserted on the very first run."""
    return [
        Todo.new(
            "Finish a task with /done <n>",
            details=(
                "Every task has a row number in the list. /done 1 completes the first row, "
                "/done again puts it back. /rm <n> deletes a task for good."
            ),
            due_date=now,
            now=now,
        ),
        Todo.new(
            "Plan your day with /today <n>",
            details=(
                "/today <n> moves a task into the Today list and back. "
                "Switch views with /filter all or /filter today."
            ),
            due_date=now + timedelta(minutes=1),
            is_today=True,
            now=now,
        ),
    ]


class TodoStore:
    """
    In-memory task list mirrored to a KeyValueStore.

    - Every mutation rewrites the whole list under TODOS_KEY, then notifies observers.
    - Decode failures on load mean "no saved data"; save failures are logged and dropped.
    - Single writer: no locking.
    """

    def __init__(
        self,
        kv: KeyValueStore,
        *,
        clock: Clock | None = None,
        seed_tutorial: bool = True,
    ) -> None:
        self._kv = kv
        self._clock: Clock = clock or local_now
        self._seed_tutorial = seed_tutorial
        self._todos: list[Todo] = []
        self._observers: list[Observer] = []
        self.load()
        logger.info("TodoStore ready total=%s", len(self._todos))

    # ---- persistence ----

    def load(self) -> None:
        self._todos = self._read()

        if self._seed_tutorial and not self._kv.get_bool(TUTORIAL_SEEDED_KEY):
            self._todos[0:0] = tutorial_todos(self._clock())
            self._kv.set_bool(TUTORIAL_SEEDED_KEY, True)
            logger.info("Seeded tutorial tasks.")
            self.save()

    def _read(self) -> list[Todo]:
        blob = self._kv.get(TODOS_KEY)
        if blob is None:
            return []
        try:
            return decode_todos(blob, now=self._clock())
        except TodoDecodeError as e:
            logger.warning("Saved tasks are unreadable, starting empty: %s", e)
            return []

    def save(self) -> bool:
        """Write the whole list. Returns False if the write was dropped."""
        try:
            blob = encode_todos(self._todos).encode("utf-8")
        except (TypeError, ValueError):
            logger.exception("Failed to encode %d tasks; keeping them in memory only.", len(self._todos))
            return False
        try:
            self._kv.set(TODOS_KEY, blob)
        except Exception:
            logger.exception("Failed to persist %d tasks.", len(self._todos))
            return False
        return True

    # ---- observers ----

    def subscribe(self, callback: Observer) -> Callable[[], None]:
        self._observers.append(callback)

        def unsubscribe() -> None:
            if callback in self._observers:
                self._observers.remove(callback)

        return unsubscribe

    def _changed(self) -> None:
        self.save()
        for cb in list(self._observers):
            try:
                cb(self)
            except Exception:
                logger.exception("Store observer %r failed.", cb)

    # ---- queries ----

    @property
    def todos(self) -> tuple[Todo, ...]:
        return tuple(self._todos)

    def __len__(self) -> int:
        return len(self._todos)

    def __iter__(self) -> Iterator[Todo]:
        return iter(tuple(self._todos))

    def index_of(self, todo_id: uuid.UUID) -> int:
        for i, t in enumerate(self._todos):
            if t.id == todo_id:
                return i
        raise TodoNotFoundError(todo_id)

    def get(self, todo_id: uuid.UUID) -> Todo:
        return self._todos[self.index_of(todo_id)]

    def now(self) -> datetime:
        return self._clock()

    # ---- mutations ----

    def add(self, todo: Todo) -> Todo:
        self._todos.append(todo)
        logger.debug("Task added id=%s today=%s", todo.id, todo.is_today)
        self._changed()
        return todo

    def toggle_done(self, todo_id: uuid.UUID) -> Todo:
        todo = self.get(todo_id)
        todo.is_done = not todo.is_done
        logger.debug("Task id=%s done=%s", todo_id, todo.is_done)
        self._changed()
        return todo

    def toggle_today(self, todo_id: uuid.UUID) -> Todo:
        todo = self.get(todo_id)
        return self.set_today(todo_id, not todo.is_today)

    def set_today(self, todo_id: uuid.UUID, value: bool) -> Todo:
        todo = self.get(todo_id)
        todo.is_today = bool(value)
        logger.debug("Task id=%s today=%s", todo_id, todo.is_today)
        self._changed()
        return todo

    def update(
        self,
        todo_id: uuid.UUID,
        *,
        title: str,
        details: str,
        estimated_hours: int,
        estimated_minutes: int,
        due_date: datetime,
    ) -> Todo:
        """Overwrite the editable fields. id and created_at are left alone."""
        todo = self.get(todo_id)
        todo.title = title
        todo.details = details
        todo.estimated_hours = estimated_hours
        todo.estimated_minutes = estimated_minutes
        todo.due_date = due_date
        logger.debug("Task edited id=%s", todo_id)
        self._changed()
        return todo

    def delete(self, todo_id: uuid.UUID) -> Todo:
        removed = self._todos.pop(self.index_of(todo_id))
        logger.debug("Task deleted id=%s", todo_id)
        self._changed()
        return removed

    def move(self, todo_id: uuid.UUID, to_index: int) -> int:
        """Move a task to `to_index` (clamped). Returns the final index."""
        todo = self._todos.pop(self.index_of(todo_id))
        to_index = max(0, min(len(self._todos), int(to_index)))
        self._todos.insert(to_index, todo)
        logger.debug("Task moved id=%s index=%s", todo_id, to_index)
        self._changed()
        return to_index

    def clear(self) -> int:
        """Drop every task. The tutorial flag stays set."""
        n = len(self._todos)
        self._todos.clear()
        logger.info("Cleared %d tasks.", n)
        self._changed()
        return n
