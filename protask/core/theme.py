"""
FILE: protask/core/theme.py
PURPOSE: Theme mode preference stored in its own slot
EXPORTS:
  - load_theme() -> ThemeMode
  - toggle_theme(current) -> ThemeMode
  - set_system_theme() -> ThemeMode
DEPENDENCIES:
  - protask.core.repository (get_int, set_int)
  - protask.core.models (ThemeMode)
NOTES:
  - Absent or out-of-range slot values fall back to DEFAULT_THEME_ORDINAL
  - Toggle goes light -> dark, and anything else -> light
"""

from . import repository
from .constants import THEME_SLOT, DEFAULT_THEME_ORDINAL
from .models import ThemeMode


def load_theme() -> ThemeMode:
    stored = repository.get_int(THEME_SLOT)
    if stored is None:
        return ThemeMode(DEFAULT_THEME_ORDINAL)
    try:
        return ThemeMode(stored)
    except ValueError:
        return ThemeMode(DEFAULT_THEME_ORDINAL)


def toggle_theme(current: ThemeMode) -> ThemeMode:
    """Flip between light and dark, save, and return the new mode."""
    mode = ThemeMode.DARK if current is ThemeMode.LIGHT else ThemeMode.LIGHT
    repository.set_int(THEME_SLOT, int(mode))
    return mode


def set_system_theme() -> ThemeMode:
    repository.set_int(THEME_SLOT, int(ThemeMode.SYSTEM))
    return ThemeMode.SYSTEM
