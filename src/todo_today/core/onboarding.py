# src/todo_today/core/onboarding.py

"""First-run welcome screen. Its flag is independent of task data."""

from __future__ import annotations

import logging

from .ports import KeyValueStore

logger = logging.getLogger(__name__)

ONBOARDING_SHOWN_KEY = "onboarding_shown"

ONBOARDING_PAGES: tuple[tuple[str, str], ...] = (
    (
        "Welcome",
        "Keep one short list of things to do. Everything is stored on this device only.",
    ),
    (
        "Plan today",
        "Mark the tasks you want to do today with /today <n>, then /filter today "
        "to see just those.",
    ),
    (
        "Finish things",
        "/done <n> completes a task, /edit <n> changes it, /rm <n> deletes it. "
        "Type /help at any time.",
    ),
)


def should_show_onboarding(kv: KeyValueStore) -> bool:
    return not kv.get_bool(ONBOARDING_SHOWN_KEY)


def mark_onboarding_shown(kv: KeyValueStore) -> None:
    kv.set_bool(ONBOARDING_SHOWN_KEY, True)
    logger.debug("Onboarding marked as shown.")


def reset_onboarding(kv: KeyValueStore) -> None:
    kv.set_bool(ONBOARDING_SHOWN_KEY, False)


def render_onboarding(app_name: str = "todo-today") -> str:
    width = 60
    lines = ["=" * width, f" {app_name}".center(width), "=" * width]
    for i, (title, body) in enumerate(ONBOARDING_PAGES, start=1):
        lines.append("")
        lines.append(f" {i}. {title}")
        lines.append(f"    {body}")
    lines.append("")
    lines.append("=" * width)
    return "\n".join(lines)
