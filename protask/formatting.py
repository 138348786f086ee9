"""
FILE: protask/formatting.py
PURPOSE: Shared formatting utilities for CLI and REPL output
EXPORTS:
  - TaskFormatter: Class for formatting tasks
  - parse_rows: Parse comma-separated row numbers
DEPENDENCIES:
  - rich (for table/panel formatting)
  - json (for JSON serialization)
  - typing (type hints)
  - protask.core.models (Task, Priority)
NOTES:
  - Centralized formatting logic for consistency
  - Used by both CLI and REPL
  - Row numbers are 1-based positions in the visible list, not task ids
"""

import json
from typing import List, Dict, Any

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .core.models import Task, Priority

PRIORITY_STYLES = {
    Priority.HIGH: "bold red",
    Priority.MEDIUM: "yellow",
    Priority.LOW: "dim",
}


def status_marker(task: Task, done: str = "✓", pending: str = "○") -> str:
    return done if task.is_done else pending


def sub_task_summary(task: Task) -> str:
    if not task.sub_tasks:
        return "-"
    return f"{task.done_sub_task_count}/{len(task.sub_tasks)}"


class TaskFormatter:
    """Centralized task display formatting."""

    @staticmethod
    def priority_label(priority: Priority) -> str:
        style = PRIORITY_STYLES[priority]
        return f"[{style}]{priority.label}[/{style}]"

    @staticmethod
    def title_markup(task: Task) -> str:
        if task.is_done:
            return f"[strike dim]{escape(task.title)}[/strike dim]"
        return escape(task.title)

    @staticmethod
    def create_table(tasks: List[Task], title: str = "Tasks") -> Table:
        """
        Create Rich table for the visible tasks.

        Args:
            tasks: Visible tasks, in display order
            title: Table title

        Returns:
            Rich Table object ready for display
        """
        table = Table(title=title, show_header=True, header_style="bold cyan")
        table.add_column("#", style="cyan", width=4, no_wrap=True)
        table.add_column("", width=2)
        table.add_column("Priority", width=8)
        table.add_column("Title", style="white")
        table.add_column("Sub-tasks", style="magenta", width=9)

        for row, task in enumerate(tasks, 1):
            marker_style = "green" if task.is_done else "yellow"
            table.add_row(
                str(row),
                f"[{marker_style}]{status_marker(task)}[/{marker_style}]",
                TaskFormatter.priority_label(task.priority),
                TaskFormatter.title_markup(task),
                sub_task_summary(task),
            )

        return table

    @staticmethod
    def create_detail_panel(task: Task, row: int) -> Panel:
        """Full view of one task including its numbered sub-tasks."""
        lines = [
            f"[bold]{escape(task.title)}[/bold]",
            "",
            f"Status:   {'[green]done[/green]' if task.is_done else '[yellow]pending[/yellow]'}",
            f"Priority: {TaskFormatter.priority_label(task.priority)}",
        ]

        if task.sub_tasks:
            lines.append("")
            lines.append("[bold]Sub-tasks:[/bold]")
            for number, sub in enumerate(task.sub_tasks, 1):
                mark = "[green]✓[/green]" if sub.is_done else "[yellow]○[/yellow]"
                text = escape(sub.title)
                if sub.is_done:
                    text = f"[strike dim]{text}[/strike dim]"
                lines.append(f"  {number}. {mark} {text}")
        else:
            lines.append("")
            lines.append("[dim]No sub-tasks[/dim]")

        return Panel("\n".join(lines), title=f"Task #{row}", border_style="cyan")

    @staticmethod
    def to_json_dict(task: Task) -> Dict[str, Any]:
        """Convert single task to the stored document shape."""
        return task.to_dict()

    @staticmethod
    def to_json_array(tasks: List[Task]) -> str:
        """Convert task list to JSON array string."""
        return json.dumps([TaskFormatter.to_json_dict(t) for t in tasks], indent=2)

    @staticmethod
    def to_raw_lines(tasks: List[Task]) -> List[str]:
        """
        Convert task list to plain text lines.

        Returns:
            One "row: [x] title (priority)" line per task
        """
        lines = []
        for row, task in enumerate(tasks, 1):
            marker = status_marker(task, done="x", pending=" ")
            lines.append(f"{row}: [{marker}] {task.title} ({task.priority.label})")
        return lines


def parse_rows(row_string: str) -> List[int]:
    """
    Parse comma-separated row numbers.

    Args:
        row_string: Comma-separated string of rows (e.g., "1,2,3")

    Returns:
        List of integers

    Raises:
        ValueError: If any row is not a valid integer
    """
    rows = [r.strip() for r in row_string.split(",")]
    return [int(r) for r in rows if r]
