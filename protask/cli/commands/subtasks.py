"""
FILE: protask/cli/commands/subtasks.py
PURPOSE: Sub-task commands (sub add, sub done, sub rm)
"""

from typing import Optional

import typer
from rich.markup import escape

from ..app import sub_app, console, error_console, open_store, report_persist_error
from ...core import service
from ...core.exceptions import ProTaskError
from .tasks import FILTER_OPTION, SEARCH_OPTION, DESC_OPTION


@sub_app.command("add")
def sub_add(
    row: int = typer.Argument(..., help="Row number of the parent task"),
    title: str = typer.Argument(..., help="Sub-task title"),
    filter_name: Optional[str] = FILTER_OPTION,
    search: Optional[str] = SEARCH_OPTION,
    descending: bool = DESC_OPTION,
):
    """
    Append a sub-task to a task.

    Example:
        protask sub add 1 "Check fridge"
    """
    store = open_store(filter_name, search, descending)
    try:
        task = service.add_sub_task(store, row, title)
    except ProTaskError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    report_persist_error(store)
    console.print(
        f"[green]✓ Added sub-task {len(task.sub_tasks)} to[/green] {escape(task.title)}"
    )


@sub_app.command("done")
def sub_done(
    row: int = typer.Argument(..., help="Row number of the parent task"),
    number: int = typer.Argument(..., help="Sub-task number from 'show'"),
    filter_name: Optional[str] = FILTER_OPTION,
    search: Optional[str] = SEARCH_OPTION,
    descending: bool = DESC_OPTION,
):
    """
    Toggle a sub-task between pending and completed.

    Example:
        protask sub done 1 2
    """
    store = open_store(filter_name, search, descending)
    try:
        sub = service.toggle_sub_task(store, row, number)
    except ProTaskError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    report_persist_error(store)
    if sub.is_done:
        console.print(f"[green]✓ Completed sub-task:[/green] {escape(sub.title)}")
    else:
        console.print(f"[yellow]○ Reopened sub-task:[/yellow] {escape(sub.title)}")


@sub_app.command("rm")
def sub_rm(
    row: int = typer.Argument(..., help="Row number of the parent task"),
    number: int = typer.Argument(..., help="Sub-task number from 'show'"),
    filter_name: Optional[str] = FILTER_OPTION,
    search: Optional[str] = SEARCH_OPTION,
    descending: bool = DESC_OPTION,
):
    """
    Remove a sub-task.

    Example:
        protask sub rm 1 2
    """
    store = open_store(filter_name, search, descending)
    try:
        sub = service.remove_sub_task(store, row, number)
    except ProTaskError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    report_persist_error(store)
    console.print(f"[red]✗ Removed sub-task:[/red] {escape(sub.title)}")
