"""
FILE: protask/cli/commands/__init__.py
PURPOSE: CLI command modules
"""

# Export all command handlers for easy importing
from .tasks import (
    add,
    ls,
    show,
    done,
    edit,
    rm,
)
from .subtasks import (
    sub_add,
    sub_done,
    sub_rm,
)
from .system import (
    version,
    help,
    repl,
    theme,
)

__all__ = [
    "add",
    "ls",
    "show",
    "done",
    "edit",
    "rm",
    "sub_add",
    "sub_done",
    "sub_rm",
    "version",
    "help",
    "repl",
    "theme",
]
