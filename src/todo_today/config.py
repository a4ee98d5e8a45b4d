# src/todo_today/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Nothing required at import time; every value has a default.
- Local overrides via config_local.py for a small, explicit set of names.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ENV_PREFIX = "TODO"

DEFAULT_PRIVACY_POLICY_URL = "https://example.com/todo-today/privacy"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_choice(name: str, choices: tuple[str, ...], default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    return value if value in choices else default


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    kv_db_path: Path
    log_dir: Path

    # ---- Behaviour ----
    default_filter: str
    seed_tutorial: bool
    show_onboarding: bool
    console_enabled: bool

    # ---- Links ----
    privacy_policy_url: str

    @staticmethod
    def from_env() -> "Settings":
        app_name = _first_env(_k("APP_NAME"), default="todo-today") or "todo-today"
        # The console is interactive: only warnings and errors by default.
        log_level = _env(_k("LOG_LEVEL"), "WARNING")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/todo-today"))
        kv_db_path = _env_path(_k("KV_DB_PATH"), data_dir / "storage.sqlite3")
        log_dir = _env_path(_k("LOG_DIR"), data_dir)

        default_filter = _env_choice(_k("DEFAULT_FILTER"), ("all", "today"), "all")
        seed_tutorial = _env_bool(_k("SEED_TUTORIAL"), True)
        show_onboarding = _env_bool(_k("SHOW_ONBOARDING"), True)
        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        privacy_policy_url = (
            _first_env(_k("PRIVACY_POLICY_URL"), default=DEFAULT_PRIVACY_POLICY_URL)
            or DEFAULT_PRIVACY_POLICY_URL
        ).strip()

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            kv_db_path=kv_db_path,
            log_dir=log_dir,
            default_filter=default_filter,
            seed_tutorial=seed_tutorial,
            show_onboarding=show_onboarding,
            console_enabled=console_enabled,
            privacy_policy_url=privacy_policy_url,
        )


SETTINGS = Settings.from_env()

# ---- Optional local overrides (never committed) ----
# Prefer .env; use config_local.py only for a few switches.
_config_local: Optional[object]
try:
    import config_local as _config_local  # type: ignore
except ImportError:
    _config_local = None

if _config_local is not None:
    for _name, _field in (
        ("SEED_TUTORIAL", "seed_tutorial"),
        ("SHOW_ONBOARDING", "show_onboarding"),
        ("CONSOLE_ENABLED", "console_enabled"),
    ):
        if hasattr(_config_local, _name):
            object.__setattr__(SETTINGS, _field, bool(getattr(_config_local, _name)))  # type: ignore[misc]


def get_settings() -> Settings:
    return SETTINGS
