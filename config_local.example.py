# config_local.example.py

"""
Example local overrides.

Usage:
  1) Copy this file to `config_local.py`
  2) Adjust values for your machine
  3) Never commit `config_local.py` (it is gitignored)

Prefer `.env`. Only the switches below are read from this file.
"""

# Example: never insert the tutorial tasks
# SEED_TUTORIAL = False

# Example: skip the welcome screen
# SHOW_ONBOARDING = False

# Example: disable the console (useful when scripting against the package)
# CONSOLE_ENABLED = False
