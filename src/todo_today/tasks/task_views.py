# src/todo_today/tasks/task_views.py

"""
Derived views of the task list (computed on demand, never persisted).

Filter membership:
- ALL   -> tasks NOT marked today
- TODAY -> tasks marked today

Both sections are sorted by due date ascending; ties keep list order.
"""

from __future__ import annotations

from collections.abc import Iterable

from .task_models import ListFilter, Todo


def matches_filter(todo: Todo, flt: ListFilter) -> bool:
    if flt is ListFilter.TODAY:
        return todo.is_today
    return not todo.is_today


def _by_due_date(todos: Iterable[Todo]) -> list[Todo]:
    return sorted(todos, key=lambda t: t.due_date)


def pending_todos(todos: Iterable[Todo], flt: ListFilter) -> list[Todo]:
    return _by_due_date(t for t in todos if matches_filter(t, flt) and not t.is_done)


def done_todos(todos: Iterable[Todo], flt: ListFilter) -> list[Todo]:
    return _by_due_date(t for t in todos if matches_filter(t, flt) and t.is_done)


def visible_rows(todos: Iterable[Todo], flt: ListFilter) -> list[Todo]:
    """Pending rows then done rows, in display order (row n == index n-1)."""
    snapshot = list(todos)
    return pending_todos(snapshot, flt) + done_todos(snapshot, flt)


def section_titles(flt: ListFilter) -> tuple[str, str]:
    if flt is ListFilter.TODAY:
        return "Today's plan", "Done today"
    return "Planned", "Done"


def empty_state_title(flt: ListFilter) -> str:
    if flt is ListFilter.TODAY:
        return "Nothing planned for today"
    return "Add your first task"
