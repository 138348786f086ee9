"""
FILE: protask/repl/commands/subtasks.py
PURPOSE: Sub-task command handler for REPL ('sub add|done|rm')
"""

from rich.markup import escape

from ..context import REPLContext
from ..display import console
from ..parser import ParseResult
from ...core import service
from ...core.exceptions import ProTaskError

SUB_USAGE = "sub add <row> <title> | sub done <row> <n> | sub rm <row> <n>"


def _int_arg(value: str, what: str):
    try:
        return int(value)
    except ValueError:
        console.print(f"[red]Error:[/red] Invalid {what}: {value}")
        return None


def handle_sub_command(ctx: REPLContext, result: ParseResult) -> None:
    """
    Handle 'sub' command - sub-task operations on a task row.

    Usage:
        sub add 1 Check fridge
        sub done 1 2
        sub rm 1 2
    """
    if len(result.args) < 3:
        console.print("[red]Error:[/red] Missing arguments")
        console.print(f"[dim]Usage: {SUB_USAGE}[/dim]")
        return

    action = result.args[0].lower()
    row = _int_arg(result.args[1], "row number")
    if row is None:
        return

    try:
        if action == "add":
            title = " ".join(result.args[2:])
            task = service.add_sub_task(ctx.store, row, title)
            console.print(
                f"[green]✓ Added sub-task {len(task.sub_tasks)} to[/green] {escape(task.title)}"
            )
            return

        number = _int_arg(result.args[2], "sub-task number")
        if number is None:
            return

        if action == "done":
            sub = service.toggle_sub_task(ctx.store, row, number)
            state = "[green]✓ Completed" if sub.is_done else "[yellow]○ Reopened"
            console.print(f"{state} sub-task:[/] {escape(sub.title)}")
        elif action == "rm":
            sub = service.remove_sub_task(ctx.store, row, number)
            console.print(f"[red]✗ Removed sub-task:[/red] {escape(sub.title)}")
        else:
            console.print(f"[red]Error:[/red] Unknown sub command '{action}'")
            console.print(f"[dim]Usage: {SUB_USAGE}[/dim]")
    except ProTaskError as e:
        console.print(f"[red]Error:[/red] {e}")
