"""
FILE: protask/repl/__init__.py
PURPOSE: REPL package for interactive task management
EXPORTS:
  - main() (from repl.main)
DEPENDENCIES:
  - prompt_toolkit (REPL interface)
  - rich (formatted output)
  - protask.core (store, service)
NOTES:
  - Entry point for interactive mode
  - Provides autocomplete and command history
"""

from .main import main

__all__ = ["main"]
