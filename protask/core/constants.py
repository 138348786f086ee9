"""
FILE: protask/core/constants.py
PURPOSE: Constants used throughout the application
EXPORTS:
  - TASKS_SLOT: Storage key holding the task collection document
  - THEME_SLOT: Storage key holding the theme mode ordinal
  - DEFAULT_THEME_ORDINAL: Theme used when the slot is absent or invalid
  - DEFAULT_PRIORITY: Priority for new tasks when none is given
DEPENDENCIES:
  - protask.core.models (Priority, ThemeMode)
NOTES:
  - Slot names match the keys written by earlier releases
"""

from .models import Priority, ThemeMode

# Storage slot keys
TASKS_SLOT = "tasks"
THEME_SLOT = "themeMode"

# Default values
DEFAULT_THEME_ORDINAL = int(ThemeMode.DARK)
DEFAULT_PRIORITY = Priority.MEDIUM
