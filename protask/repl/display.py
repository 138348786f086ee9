"""
FILE: protask/repl/display.py
PURPOSE: Display functions for tasks, and the console render surface
EXPORTS:
  - console (Rich console shared by the REPL)
  - ConsoleSurface (RenderSurface that prints row inserts/removals)
  - display_task() - Display a single task
  - display_tasks_table() - Display the visible list
DEPENDENCIES:
  - rich (formatted output)
  - protask.core.models (Task)
  - protask.formatting (TaskFormatter)
NOTES:
  - ConsoleSurface buffers changes and prints them in flush(), so a
    command that moves many rows can fall back to a one-line summary
"""

from typing import List, Optional, Tuple

from rich.console import Console
from rich.markup import escape

from ..core.models import Task
from ..formatting import TaskFormatter

console = Console()

# More row changes than this are summarized instead of listed
MAX_LISTED_CHANGES = 5


class ConsoleSurface:
    """Row-indexed surface that narrates list edits on the console."""

    def __init__(self, console_instance: Optional[Console] = None):
        self._console = console_instance or console
        self._pending: List[Tuple[str, int, Task]] = []

    def insert_item(self, position: int, task: Task) -> None:
        self._pending.append(("+", position, task))

    def remove_item(self, position: int, task: Task) -> None:
        # task is the placeholder copy of the row that just disappeared
        self._pending.append(("-", position, task))

    @property
    def pending(self) -> List[Tuple[str, int, Task]]:
        return list(self._pending)

    def discard(self) -> None:
        self._pending.clear()

    def flush(self) -> None:
        if not self._pending:
            return
        if len(self._pending) > MAX_LISTED_CHANGES:
            self._console.print(f"[dim]({len(self._pending)} row changes, type 'ls' to see the list)[/dim]")
        else:
            for sign, position, task in self._pending:
                style = "green" if sign == "+" else "red"
                self._console.print(
                    f"  [{style}]{sign}[/{style}] [dim]row {position + 1}:[/dim] {escape(task.title)}"
                )
        self._pending.clear()


def display_task(task: Task, row: int, console_instance: Console = None) -> None:
    """Display a single task with its sub-tasks."""
    if console_instance is None:
        console_instance = console
    console_instance.print(TaskFormatter.create_detail_panel(task, row))


def display_tasks_table(tasks: List[Task], title: str = "Tasks", console_instance: Console = None) -> None:
    """
    Display tasks in a formatted table.

    Args:
        tasks: Visible tasks to display, in order
        title: Table title (the REPL puts the active view here)
        console_instance: Optional Rich console instance (defaults to module console)
    """
    if console_instance is None:
        console_instance = console

    if not tasks:
        console_instance.print("[dim]No tasks found[/dim]")
        return

    console_instance.print(TaskFormatter.create_table(tasks, title=title))
