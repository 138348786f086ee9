"""
FILE: protask/repl/commands/tasks.py
PURPOSE: Task command handlers for REPL (add, ls, show, done, edit, rm, undo)
"""

from rich.markup import escape

from ..context import REPLContext
from ..display import console, display_task, display_tasks_table
from ..parser import ParseResult
from ...core import service
from ...core.exceptions import ProTaskError, InvalidInputError
from ...core.constants import DEFAULT_PRIORITY
from ...formatting import parse_rows


def _priority_flag(result: ParseResult):
    """Priority from --priority/-p, or None if the flag wasn't given."""
    value = result.flags.get("priority")
    if value is None:
        return None
    if value is True:
        raise InvalidInputError("--priority needs a value: low, medium or high")
    return service.parse_priority(value)


def _rows_arg(result: ParseResult, usage: str):
    if not result.args:
        console.print("[red]Error:[/red] Row number required")
        console.print(f"[dim]Usage: {escape(usage)}[/dim]")
        return None
    try:
        rows = parse_rows(result.args[0])
    except ValueError:
        console.print(f"[red]Error:[/red] Invalid row number(s): {result.args[0]}")
        return None
    if not rows:
        console.print("[red]Error:[/red] Row number required")
        return None
    return rows


def handle_add_command(ctx: REPLContext, result: ParseResult) -> None:
    """
    Handle 'add' command - create new task at the top of the list.

    Usage:
        add Buy groceries
        add "Walk dog" -p high
    """
    if not result.args:
        console.print("[red]Error:[/red] Task title required")
        console.print("[dim]Usage: add <title> [-p low|medium|high][/dim]")
        return

    # Join all args as the title (in case they didn't use quotes)
    title = " ".join(result.args)

    try:
        priority = _priority_flag(result)
        if priority is None:
            priority = DEFAULT_PRIORITY
        task = service.add_task(ctx.store, title, priority)
        console.print(
            f"[green]✓ Created task:[/green] {escape(task.title)} "
            f"[dim]({task.priority.label})[/dim]"
        )
    except ProTaskError as e:
        console.print(f"[red]Error:[/red] {e}")


def handle_ls_command(ctx: REPLContext, result: ParseResult) -> None:
    """
    Handle 'ls' command - show the visible list under the current view.

    Usage:
        ls
    """
    display_tasks_table(ctx.store.visible_tasks(), title=ctx.view_title())
    pending, completed = service.task_counts(ctx.store)
    console.print(f"[dim]{pending} pending, {completed} completed[/dim]")


def handle_show_command(ctx: REPLContext, result: ParseResult) -> None:
    """
    Handle 'show' command - view one task and its sub-tasks.

    Usage:
        show 2
    """
    rows = _rows_arg(result, "show <row>")
    if rows is None:
        return
    try:
        task = service.task_at_row(ctx.store, rows[0])
        display_task(task, rows[0])
    except ProTaskError as e:
        console.print(f"[red]Error:[/red] {e}")


def handle_done_command(ctx: REPLContext, result: ParseResult) -> None:
    """
    Handle 'done' command - toggle completion.

    Usage:
        done 1
        done 1,2,3
    """
    rows = _rows_arg(result, "done <row>[,<row>...]")
    if rows is None:
        return
    try:
        for task in service.toggle_tasks(ctx.store, rows):
            if task.is_done:
                console.print(f"[green]✓ Completed:[/green] {escape(task.title)}")
            else:
                console.print(f"[yellow]○ Reopened:[/yellow] {escape(task.title)}")
    except ProTaskError as e:
        console.print(f"[red]Error:[/red] {e}")


def handle_edit_command(ctx: REPLContext, result: ParseResult) -> None:
    """
    Handle 'edit' command - update title and/or priority.

    Usage:
        edit 2 Buy oat milk
        edit 2 -p high
        edit 2 "New title" -p low
    """
    rows = _rows_arg(result, "edit <row> [title] [-p low|medium|high]")
    if rows is None:
        return

    title = " ".join(result.args[1:]) or None
    try:
        priority = _priority_flag(result)
        if title is None and priority is None:
            console.print("[red]Error:[/red] Give a new title and/or -p <priority>")
            return
        task = service.edit_task(ctx.store, rows[0], title=title, priority=priority)
        console.print(
            f"[green]✓ Updated:[/green] {escape(task.title)} [dim]({task.priority.label})[/dim]"
        )
    except ProTaskError as e:
        console.print(f"[red]Error:[/red] {e}")


def handle_rm_command(ctx: REPLContext, result: ParseResult) -> None:
    """
    Handle 'rm' command - delete tasks. The last one deleted can be undone.

    Usage:
        rm 3
        rm 1,2
    """
    rows = _rows_arg(result, "rm <row>[,<row>...]")
    if rows is None:
        return
    try:
        removed = service.delete_tasks(ctx.store, rows)
    except ProTaskError as e:
        console.print(f"[red]Error:[/red] {e}")
        return

    for task in removed:
        console.print(f"[red]✗ Deleted:[/red] {escape(task.title)}")
    if removed:
        console.print(f"[dim]Type 'undo' to restore '{escape(removed[-1].title)}'[/dim]")


def handle_undo_command(ctx: REPLContext, result: ParseResult) -> None:
    """
    Handle 'undo' command - restore the most recently deleted task.

    Usage:
        undo
    """
    task = service.undo_delete(ctx.store)
    if task is None:
        console.print("[yellow]Nothing to undo[/yellow]")
        return
    console.print(f"[green]✓ Restored:[/green] {escape(task.title)}")
