# src/todo_today/cli/commands.py

from __future__ import annotations

import inspect
import logging
import shlex
from collections.abc import Callable
from typing import cast

from .. import __version__
from ..core.onboarding import mark_onboarding_shown, render_onboarding
from ..core.state import AppState
from ..tasks.task_api import FormError, TodoDraft, create_todo, edit_todo, split_form_args
from ..tasks.task_models import ListFilter, Todo
from ..tasks.task_store import TodoNotFoundError
from ..tasks.task_views import visible_rows
from ..ui.formatting import render_detail, render_list

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

_MIN_ID_PREFIX = 4


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        Arguments are split shell-style, so "quoted values" keep their spaces.
        """
        if not line.startswith("/"):
            return None

        try:
            parts = shlex.split(line[1:])
        except ValueError:
            parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  /exit - Quit.")
        lines.append("Anything that is not a command is added as a new task.")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- helpers ----


def resolve_todo(state: AppState, ref: str) -> Todo:
    """
    Find a task by its row number in the current view, or by id prefix.

    Raises TodoNotFoundError if nothing (or more than one task) matches.
    """
    ref = ref.strip().rstrip(".")
    if ref.isdigit():
        rows = visible_rows(state.store.todos, state.filter)
        idx = int(ref) - 1
        if 0 <= idx < len(rows):
            return rows[idx]
        raise TodoNotFoundError(f"No row {ref} in this list.")

    prefix = ref.lower()
    if len(prefix) >= _MIN_ID_PREFIX:
        matches = [t for t in state.store.todos if str(t.id).startswith(prefix)]
        if len(matches) == 1:
            return matches[0]
        if len(matches) > 1:
            raise TodoNotFoundError(f"Id prefix {ref!r} is ambiguous.")
    raise TodoNotFoundError(f"No task {ref!r}.")


def _not_found_message(e: TodoNotFoundError) -> str:
    return str(e.args[0]) if e.args else "Task not found."


def _with_todo(state: AppState, args: list[str], usage: str) -> Todo | str:
    if not args:
        return usage
    try:
        return resolve_todo(state, args[0])
    except TodoNotFoundError as e:
        return _not_found_message(e)


# ---- commands ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    return render_list(state.store.todos, state.filter, state.store.now())


def cmd_filter(state: AppState, args: list[str]) -> str:
    """
    /filter         -> show current filter
    /filter all     -> tasks not planned for today
    /filter today   -> tasks planned for today
    """
    if not args:
        return f"Filter is {state.filter.label}. Use /filter all or /filter today."
    try:
        state.filter = ListFilter.parse(args[0])
    except ValueError:
        return "Usage: /filter all | /filter today."
    logger.debug("Filter switched to %s", state.filter)
    return render_list(state.store.todos, state.filter, state.store.now())


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add Buy milk due=tomorrow h=1 m=30 details="two bottles" today=yes
    """
    now = state.store.now()
    words, fields = split_form_args(args)
    draft = TodoDraft.for_new(state.filter, now)
    try:
        draft.apply_fields(fields, now)
    except FormError as e:
        return f"Not added: {e}."
    if words:
        draft.title = " ".join(words)

    todo = create_todo(state.store, draft, now=now)
    if todo is None:
        return "Title required. Usage: /add <title> [due=... h=... m=... details=... today=yes]"
    where = " (Today)" if todo.is_today else ""
    return f"Added: {todo.title}{where}"


def quick_add(state: AppState, text: str) -> str:
    """Plain console text: the whole line is the title, form defaults for the rest."""
    now = state.store.now()
    draft = TodoDraft.for_new(state.filter, now)
    draft.title = text
    todo = create_todo(state.store, draft, now=now)
    if todo is None:
        return "Title required."
    return f"Added: {todo.title}{' (Today)' if todo.is_today else ''}"


def cmd_edit(state: AppState, args: list[str]) -> str:
    """
    /edit <n> title="New title" details=... h=.. m=.. due=.. today=yes|no
    """
    found = _with_todo(state, args, "Usage: /edit <n> field=value ...")
    if isinstance(found, str):
        return found

    stray, fields = split_form_args(args[1:])
    if stray:
        return f"Not saved: not a field: {' '.join(stray)}. Fields: title, details, h, m, due, today."
    if not fields:
        return (
            render_detail(found, state.store.now())
            + "\nFields: title, details, h, m, due, today (e.g. /edit 1 due=tomorrow)"
        )

    draft = TodoDraft.from_todo(found)
    try:
        draft.apply_fields(fields, state.store.now())
    except FormError as e:
        return f"Not saved: {e}."

    if not edit_todo(state.store, found.id, draft):
        return "Title required. Nothing was changed."
    return f"Saved: {draft.trimmed_title}"


def cmd_show(state: AppState, args: list[str]) -> str:
    found = _with_todo(state, args, "Usage: /show <n>")
    if isinstance(found, str):
        return found
    return render_detail(found, state.store.now())


def cmd_done(state: AppState, args: list[str]) -> str:
    found = _with_todo(state, args, "Usage: /done <n>")
    if isinstance(found, str):
        return found
    todo = state.store.toggle_done(found.id)
    return f"Done: {todo.title}" if todo.is_done else f"Back to pending: {todo.title}"


def cmd_today(state: AppState, args: list[str]) -> str:
    found = _with_todo(state, args, "Usage: /today <n>")
    if isinstance(found, str):
        return found
    todo = state.store.toggle_today(found.id)
    return f"Planned for today: {todo.title}" if todo.is_today else f"Removed from today: {todo.title}"


def cmd_rm(state: AppState, args: list[str]) -> str:
    found = _with_todo(state, args, "Usage: /rm <n>")
    if isinstance(found, str):
        return found
    state.store.delete(found.id)
    return f"Deleted: {found.title}"


def cmd_mv(state: AppState, args: list[str]) -> str:
    """
    /mv <n> <position> -> move a task to a position in the stored order (1 = first).
    Only ties on the due date are shown in stored order.
    """
    if len(args) != 2 or not args[1].isdigit():
        return "Usage: /mv <n> <position>"
    found = _with_todo(state, args, "Usage: /mv <n> <position>")
    if isinstance(found, str):
        return found
    final = state.store.move(found.id, int(args[1]) - 1)
    return f"Moved: {found.title} -> position {final + 1}"


def cmd_settings(state: AppState, args: list[str]) -> str:
    s = state.settings
    todos = state.store.todos
    n_done = sum(1 for t in todos if t.is_done)
    n_today = sum(1 for t in todos if t.is_today)
    return (
        "Settings:\n"
        f"  App: {getattr(s, 'app_name', 'todo-today')} {__version__}\n"
        f"  Storage: {getattr(s, 'kv_db_path', '(memory)')}\n"
        f"  Tasks: {len(todos)} total, {n_done} done, {n_today} today\n"
        f"  Default filter: {getattr(s, 'default_filter', 'all')}\n"
        f"  Privacy policy: {getattr(s, 'privacy_policy_url', '')} (/privacy to open)\n"
        "  /onboarding shows the welcome screen again, /reset confirm deletes every task."
    )


def cmd_privacy(state: AppState, args: list[str]) -> str:
    url = str(getattr(state.settings, "privacy_policy_url", "") or "")
    if not url:
        return "No privacy policy link configured."
    try:
        opened = state.url_opener.open(url)
    except Exception:
        logger.exception("Failed to open %s", url)
        opened = False
    return f"Opened {url}" if opened else f"Privacy policy: {url}"


def cmd_onboarding(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    text = render_onboarding(str(getattr(state.settings, "app_name", "todo-today")))
    mark_onboarding_shown(state.kv)
    if emit:
        emit(text)
        return "Welcome screen shown."
    return text


def cmd_reset(state: AppState, args: list[str]) -> str:
    if not args or args[0].lower() != "confirm":
        return "This deletes every task. Type /reset confirm to continue."
    n = state.store.clear()
    return f"Deleted {n} task(s)."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the current list.", aliases=["ls", "l"])
registry.register(
    "filter", cmd_filter, help_text="Switch list: /filter all | /filter today.", aliases=["f"]
)
registry.register(
    "add",
    cmd_add,
    help_text="Add a task: /add <title> [due=tomorrow h=1 m=30 details=\"...\" today=yes].",
    aliases=["a", "new"],
)
registry.register("edit", cmd_edit, help_text="Edit a task: /edit <n> field=value ...", aliases=["e"])
registry.register("show", cmd_show, help_text="Show task details: /show <n>.", aliases=["s"])
registry.register("done", cmd_done, help_text="Complete / reopen a task: /done <n>.", aliases=["d", "x"])
registry.register("today", cmd_today, help_text="Add to / remove from today: /today <n>.", aliases=["t"])
registry.register("rm", cmd_rm, help_text="Delete a task: /rm <n>.", aliases=["del", "delete"])
registry.register("mv", cmd_mv, help_text="Reorder: /mv <n> <position>.", aliases=["move"])
registry.register("settings", cmd_settings, help_text="Show settings and storage info.")
registry.register("privacy", cmd_privacy, help_text="Open the privacy policy.")
registry.register("onboarding", cmd_onboarding, help_text="Show the welcome screen again.")
registry.register("reset", cmd_reset, help_text="Delete every task: /reset confirm.")
