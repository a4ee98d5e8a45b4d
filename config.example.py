# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Use:
- .env (local, gitignored)
- config_local.py (local safe overrides, gitignored)

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TODO_APP_NAME": "App display name (default: todo-today).",
    "TODO_LOG_LEVEL": "Console logging level (default: WARNING). The log file always gets DEBUG.",
    # Paths (gitignored)
    "TODO_DATA_DIR": "Local data directory (default: .local/todo-today).",
    "TODO_KV_DB_PATH": "Key-value SQLite path holding tasks and flags (default: <data_dir>/storage.sqlite3).",
    "TODO_LOG_DIR": "Directory for todo.log (default: <data_dir>).",
    # Behaviour
    "TODO_DEFAULT_FILTER": "List shown at start: all | today (default: all).",
    "TODO_SEED_TUTORIAL": "Insert the two tutorial tasks on first run (true/false, default: true).",
    "TODO_SHOW_ONBOARDING": "Show the welcome screen on first run (true/false, default: true).",
    "TODO_CONSOLE_ENABLED": "Run the interactive console (true/false, default: true).",
    # Links
    "TODO_PRIVACY_POLICY_URL": "Privacy policy link opened by /privacy.",
}
