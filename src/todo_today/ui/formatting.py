# src/todo_today/ui/formatting.py

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from ..tasks.task_models import ListFilter, Todo
from ..tasks.task_views import done_todos, empty_state_title, pending_todos, section_titles

CHECK_DONE = "[x]"
CHECK_OPEN = "[ ]"
TODAY_MARK = "*"


def format_estimate(hours: int, minutes: int) -> str:
    if hours <= 0 and minutes <= 0:
        return "-"
    if hours <= 0:
        return f"{minutes}m"
    if minutes <= 0:
        return f"{hours}h"
    return f"{hours}h {minutes}m"


def format_due(due: datetime, now: datetime) -> str:
    due = due.astimezone(now.tzinfo)
    days = (due.date() - now.date()).days
    if days == 0:
        label = "Today"
    elif days == 1:
        label = "Tomorrow"
    elif days == -1:
        label = "Yesterday"
    elif due.year == now.year:
        label = due.strftime("%a %d %b")
    else:
        label = due.strftime("%d %b %Y")
    return f"{label} (overdue)" if days < 0 else label


def render_row(n: int, todo: Todo, now: datetime) -> str:
    check = CHECK_DONE if todo.is_done else CHECK_OPEN
    mark = TODAY_MARK if todo.is_today else " "
    parts = [f"{n:>3}. {check}{mark} {todo.title}"]
    meta = [format_due(todo.due_date, now)]
    if todo.estimated_hours or todo.estimated_minutes:
        meta.append(format_estimate(todo.estimated_hours, todo.estimated_minutes))
    if todo.details:
        meta.append("+notes")
    parts.append(f"({', '.join(meta)})")
    return " ".join(parts)


def render_detail(todo: Todo, now: datetime) -> str:
    status = "Done" if todo.is_done else "Not done"
    lines = [
        f"Task: {todo.title}",
        f"  Status:   {status}{' / Today' if todo.is_today else ''}",
        f"  Due:      {todo.due_date.strftime('%Y-%m-%d %H:%M')} ({format_due(todo.due_date, now)})",
        f"  Estimate: {format_estimate(todo.estimated_hours, todo.estimated_minutes)}",
        f"  Created:  {todo.created_at.strftime('%Y-%m-%d %H:%M')}",
    ]
    if todo.details:
        lines.append("  Details:")
        lines.extend(f"    {line}" for line in todo.details.splitlines() or [""])
    return "\n".join(lines)


def render_empty_state(title: str) -> str:
    return "\n".join(["", "      ( no tasks )", f"  {title}", "  Type /add <title> or just the title.", ""])


def render_list(todos: Iterable[Todo], flt: ListFilter, now: datetime) -> str:
    """Render both sections; row numbers match task_views.visible_rows."""
    snapshot = list(todos)
    pending = pending_todos(snapshot, flt)
    done = done_todos(snapshot, flt)

    header = f"Tasks - {flt.label}"
    if not pending and not done:
        return header + "\n" + render_empty_state(empty_state_title(flt))

    pending_title, done_title = section_titles(flt)
    lines = [header, "", f"{pending_title}:"]
    if pending:
        lines.extend(render_row(i, t, now) for i, t in enumerate(pending, start=1))
    else:
        lines.append("  (nothing left)")
    if done:
        lines.extend(["", f"{done_title}:"])
        lines.extend(render_row(i, t, now) for i, t in enumerate(done, start=len(pending) + 1))
    return "\n".join(lines)
